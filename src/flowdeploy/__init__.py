"""
flowdeploy - compose-based deployment automation for the agentic-flow service.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

__version__ = "1.0.0"
