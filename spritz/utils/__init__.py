#!filepath: spritz/utils/__init__.py
