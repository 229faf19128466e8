"""Programmatic interfaces (REST API)"""
