"""
External data sources built on the service layer.
"""
