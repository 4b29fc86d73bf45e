"""
Configuration-related constants and resource limits.
"""

# Maximum config file size (1MB) to prevent DoS attacks
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

# Optional top-level section holding the obfuscation settings
CONFIG_SECTION = "obfuscation"
