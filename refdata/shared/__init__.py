# -*- coding: utf-8 -*-
"""Shared row normalization and the flat-row folder."""
