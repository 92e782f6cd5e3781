"""Static template and bank data"""
