"""
Web frontend for the scheduler simulator
"""
