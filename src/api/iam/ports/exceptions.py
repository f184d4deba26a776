"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
authentication and tenant-scoped data operations. They are raised by the
application layer and translated to HTTP responses by the presentation
layer. Anything not listed here is treated as an internal error.
"""


class TenantUnresolvedError(Exception):
    """Raised when the request does not identify a known tenant.

    Covers a missing or malformed Host header, a loopback host and a
    subdomain with no tenant record. Callers cannot tell these apart.
    """

    pass


class UnauthenticatedError(Exception):
    """Raised when a request carries no valid credential for its tenant.

    Wrong email, wrong password, missing session, expired session and a
    session issued for another tenant all map to this single error so
    that responses never reveal which check failed.
    """

    pass


class ValidationFailedError(Exception):
    """Raised when caller input fails a business rule.

    The message is safe to show to the caller and tells them how to
    correct the request.
    """

    pass


class DuplicateEmailError(Exception):
    """Raised when signing up with an email already registered in the tenant.

    Email addresses are unique per tenant only; the same address may be
    registered in other tenants.
    """

    pass


class DuplicateSubdomainError(Exception):
    """Raised when provisioning a tenant with a subdomain already in use.

    Subdomains are globally unique across the system.
    """

    pass


class EntityNotFoundError(Exception):
    """Raised when a tenant-scoped entity does not exist in the given tenant.

    An entity that exists under a different tenant is reported the same
    way as one that does not exist at all.
    """

    pass
