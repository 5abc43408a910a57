"""
Utils: geometry primitives and pose library loading.
"""
