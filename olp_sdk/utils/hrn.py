"""Platform resource names (HRNs).

An HRN identifies a platform resource such as a catalog and has the shape
``hrn:<partition>:<service>:<region>:<account>:<resource>``. The resource
part may itself contain colons. Plain ``http:``/``https:`` URLs are accepted
as well and are mapped to a local ``catalog-url`` partition, which lets the
clients talk to a catalog served from a custom location.

Example:
    >>> from olp_sdk.utils.hrn import HRN
    >>> hrn = HRN.from_string("hrn:here:data:::example-catalog")
    >>> hrn.data.resource
    'example-catalog'
    >>> str(hrn)
    'hrn:here:data:::example-catalog'
"""

from __future__ import annotations

import dataclasses
import urllib.parse

_PARTITION_POS = 1
_SERVICE_POS = 2
_REGION_POS = 3
_ACCOUNT_POS = 4
_RESOURCE_POS = 5
_ENTRIES_COUNT = _RESOURCE_POS + 1

# Characters that URI-component encoding leaves unescaped besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class HrnError(ValueError):
    """Raised when a string cannot be parsed as an HRN."""


@dataclasses.dataclass(frozen=True)
class HRNData:
    """Fields that make up an HRN.

    Attributes:
        partition: Partition of the platform, e.g. ``"here"`` or
            ``"here-dev"``.
        service: Service owning the resource, e.g. ``"data"``.
        resource: Resource name, e.g. the catalog name.
        region: Optional region.
        account: Optional account.
    """

    partition: str
    service: str
    resource: str
    region: str | None = None
    account: str | None = None


@dataclasses.dataclass(frozen=True)
class HRN:
    """A parsed platform resource name."""

    data: HRNData

    @classmethod
    def from_string(cls, hrn: str) -> HRN:
        """Parse an HRN string or a catalog URL.

        Args:
            hrn: ``hrn:...`` string, or an ``http(s)`` URL of a catalog.

        Returns:
            The parsed HRN.

        Raises:
            HrnError: If the string has fewer than six colon-separated
                entries or does not start with ``hrn``.
        """
        if hrn.startswith(("http:", "https:")):
            return cls(
                HRNData(
                    partition="catalog-url",
                    service="datastore",
                    region="",
                    account="",
                    resource=urllib.parse.quote(hrn, safe=_URI_COMPONENT_SAFE),
                )
            )

        entries = hrn.split(":")
        if len(entries) < _ENTRIES_COUNT or entries[0] != "hrn":
            raise HrnError("Invalid HRN")

        return cls(
            HRNData(
                partition=entries[_PARTITION_POS],
                service=entries[_SERVICE_POS],
                region=entries[_REGION_POS],
                account=entries[_ACCOUNT_POS],
                resource=":".join(entries[_RESOURCE_POS:]),
            )
        )

    def __str__(self) -> str:
        return ":".join(
            [
                "hrn",
                self.data.partition,
                self.data.service,
                self.data.region or "",
                self.data.account or "",
                self.data.resource,
            ]
        )
