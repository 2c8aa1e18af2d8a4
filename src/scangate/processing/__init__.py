"""Image extraction, signal handling and scan orchestration"""
