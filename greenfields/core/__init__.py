"""
Core configuration, logging and error handling for the Greenfields site.
"""
