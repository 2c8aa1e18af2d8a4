"""Configuration and whitelist loading"""
