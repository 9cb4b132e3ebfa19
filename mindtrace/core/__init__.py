"""
Mindtrace core: data models, errors and snapshot loading.
"""
