# hbswriter/core/__init__.py
