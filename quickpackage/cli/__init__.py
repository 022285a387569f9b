"""Command line interface for quickpackage"""
