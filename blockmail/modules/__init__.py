"""
Blockmail Modules
=================

Flask blueprint modules. Currently the newsletter block editor.
"""

__all__ = ['newsletter']
