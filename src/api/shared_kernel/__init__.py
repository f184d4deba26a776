"""Tenant primitives shared across contexts.

Holds the tenant context types, the edge middleware that forwards a
candidate subdomain, and the observation context probes bind to. Nothing
here may import from a bounded context.
"""
