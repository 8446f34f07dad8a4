"""
Module: config
Description: Application configuration loaded from the environment.
"""
