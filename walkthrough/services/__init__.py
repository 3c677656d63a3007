"""
Pipeline services
"""
