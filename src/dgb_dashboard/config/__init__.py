from .manager import Config, ConfigurationError, NodeConfig

__all__ = ['Config', 'ConfigurationError', 'NodeConfig']
