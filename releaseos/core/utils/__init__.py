"""File and process plumbing"""
