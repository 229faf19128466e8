"""Codecs, resource loading and reporting helpers"""
