from typing import Optional

import httpx


def _describe(response: httpx.Response) -> str:
    request = response.request
    return f"{request.method} {request.url} -> {response.status_code}: {response.text[:500]}"


class ApiAssertionError(AssertionError):
    """An expectation about an API response did not hold."""

    def __init__(self, message: str, response: Optional[httpx.Response] = None):
        if response is not None:
            message = f"{message} [{_describe(response)}]"
        super().__init__(message)
        self.response = response


class SchemaMismatchError(ApiAssertionError):
    def __init__(self, schema_name: str, path: str, reason: str, response: Optional[httpx.Response] = None):
        super().__init__(f"response does not match {schema_name} at {path}: {reason}", response)
        self.schema_name = schema_name
        self.path = path


class SessionBootstrapError(RuntimeError):
    """Token issuance failed; every step that needs a session is blocked."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"could not obtain an access token [{_describe(response)}]")
        self.status_code = response.status_code
        self.response = response
