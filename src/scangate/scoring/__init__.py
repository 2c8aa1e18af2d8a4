"""Severity ranking and vulnerability gating"""
