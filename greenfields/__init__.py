"""
Greenfields of Cambridge
Marketing website for a lawn-care business, with a Datastar-driven contact form.
"""

__version__ = "0.1.0"
