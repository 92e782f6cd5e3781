"""Form-session HTTP API"""
