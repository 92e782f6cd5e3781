"""Form engine and template services"""
