"""CLI package for StoryHub"""
from .main import cli

__all__ = ['cli']
