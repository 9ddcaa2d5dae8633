"""
Copyright 2024, Zep Software, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""


class ContractKitError(Exception):
    """Base exception class for ContractKit Core."""

    def __init__(self, message: str, identifier: str | None = None):
        self.message = message
        self.identifier = identifier
        # Set by the version history resolver when a per-version lookup fails
        self.version_id: str | None = None
        super().__init__(self.message)


class InvalidIdentifierError(ContractKitError):
    """Raised when a contract identifier is empty or a sentinel value."""

    def __init__(self, identifier: str | None):
        super().__init__(f'invalid contract identifier {identifier!r}', identifier)


class MalformedMetadataError(ContractKitError):
    """Raised when fetched metadata content cannot be parsed."""

    def __init__(self, locator: str, detail: str):
        self.detail = detail
        super().__init__(f'malformed metadata at {locator}: {detail}', locator)


class UnknownBuiltinKindError(ContractKitError):
    """Raised when a built-in contract kind is missing from the catalog."""

    def __init__(self, kind: str):
        super().__init__(f'built-in contract kind {kind} is not in the catalog', kind)


class PreconditionUnmetError(ContractKitError):
    """Raised when a required identity, address or connection is missing. Never retried."""

    def __init__(self, message: str, identifier: str | None = None):
        super().__init__(message, identifier)


class RegistryUnavailableError(ContractKitError):
    """Raised when a publisher registry call fails. Safe to retry with backoff."""

    def __init__(self, operation: str, detail: str, identifier: str | None = None):
        self.operation = operation
        super().__init__(f'registry call {operation} failed: {detail}', identifier)


class ContentFetchError(ContractKitError):
    """Raised when the content network cannot be reached for a locator."""

    def __init__(self, locator: str, detail: str):
        super().__init__(f'failed to fetch {locator}: {detail}', locator)
