"""
Managers for configuration
"""

from .config_manager import ConfigManager, EngineConfig

__all__ = ['ConfigManager', 'EngineConfig']
