"""Core engine for releaseos"""
