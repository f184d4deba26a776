"""Shared middleware for cross-cutting concerns.

This module contains the tenant identification value objects shared across
bounded contexts and the edge middleware that forwards the tenant candidate
extracted from the Host header.
"""
