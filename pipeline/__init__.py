"""
Job offer extraction pipeline.

Turns a rendered job page (URL + parsed markup) into a structured JobOffer
with a confidence score, using site-specific plugins with a generic
structured-data fallback.
"""

__version__ = "1.0.0"
