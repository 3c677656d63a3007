"""
Infrastructure helpers shared by pipeline stages
"""
