#!/usr/bin/env python3
"""
CLI Commands Package for flowdeploy

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .check import check
from .deploy import deploy

__all__ = ["check", "deploy"]
