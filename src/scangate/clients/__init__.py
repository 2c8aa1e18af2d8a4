"""Analysis service clients"""
