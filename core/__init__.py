"""
Shared building blocks for job offer capture: configuration, text
normalization and the HTML to Markdown renderer.
"""
