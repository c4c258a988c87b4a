# -*- coding: utf-8 -*-
"""Tracking domain (meals, food items, blood readings, activity).

Entries live in a per-user in-memory store bucketed by calendar day.
"""
