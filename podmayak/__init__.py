"""
PodmayakAI: room renovation visualisation and budget planning API
"""
__version__ = "1.0.0"
