# -*- coding: utf-8 -*-
"""
Build-time compiler for the platform's reference data:
pet taxonomy (xlsx -> JSON) and Taiwan districts (csv -> TS module).
"""

__version__ = "0.1.0"
