# tests/unit/__init__.py
