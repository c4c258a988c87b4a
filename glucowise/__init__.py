# -*- coding: utf-8 -*-
"""GlucoWise backend: meal, blood sugar and activity tracking with daily insights."""
