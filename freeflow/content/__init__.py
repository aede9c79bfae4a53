"""Content package - Generated text.

Modules:
    - dive_summary: Completion report rendered with Jinja2
"""
