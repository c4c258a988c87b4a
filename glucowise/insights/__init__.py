# -*- coding: utf-8 -*-
"""Insights: HbA1c estimate, glucose trends, next-meal suggestions and tips."""
