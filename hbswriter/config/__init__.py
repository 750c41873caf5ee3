# hbswriter/config/__init__.py
"""
Writer options and project configuration loading.
"""
