"""
Configuration Module

Environment-driven settings for the workflow editor.
"""
from flowbuilder.config.editor_config import EditorConfig
from flowbuilder.config.env_utils import read_env_defaults

__all__ = ['EditorConfig', 'read_env_defaults']
