"""Placement domain value objects."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Provider limit for storage account names.
ACCOUNT_NAME_MIN_LENGTH = 3
ACCOUNT_NAME_MAX_LENGTH = 24

_SUFFIX_PATTERN = re.compile(r"^[a-z0-9]*$")


def normalize_cluster_id(cluster_id: str) -> str:
    """Normalize a cluster id for comparison."""
    return cluster_id.strip().lower()


class SkuName(str, Enum):
    """Replication SKU of a storage account."""

    STANDARD_LRS = "Standard_LRS"
    STANDARD_ZRS = "Standard_ZRS"
    STANDARD_GRS = "Standard_GRS"
    STANDARD_RAGRS = "Standard_RAGRS"
    PREMIUM_LRS = "Premium_LRS"


class AccountKind(str, Enum):
    """Kind of storage account."""

    STORAGE = "Storage"
    STORAGE_V2 = "StorageV2"
    BLOB_STORAGE = "BlobStorage"


class AccessTier(str, Enum):
    """Blob access tier."""

    HOT = "Hot"
    COOL = "Cool"


class AccountSpec(BaseModel):
    """
    Immutable description of the accounts to place.

    The account name is a random prefix followed by suffix, so the suffix
    must leave room for the prefix inside the provider's name length limit.
    """

    model_config = ConfigDict(frozen=True)

    suffix: str
    location: str
    sku_name: SkuName = SkuName.STANDARD_LRS
    kind: AccountKind = AccountKind.STORAGE
    access_tier: Optional[AccessTier] = None
    tags: dict[str, str] = Field(default_factory=dict)

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, value: str) -> str:
        """Suffix is part of the account name: lowercase letters and digits only."""
        if not _SUFFIX_PATTERN.match(value):
            raise ValueError("suffix must contain only lowercase letters and digits")
        return value

    @field_validator("location")
    @classmethod
    def validate_location(cls, value: str) -> str:
        """Location must be given."""
        if not value.strip():
            raise ValueError("location must not be empty")
        return value.strip()

    @model_validator(mode="after")
    def validate_access_tier(self) -> AccountSpec:
        """Access tier applies to blob-capable kinds only."""
        if self.kind == AccountKind.BLOB_STORAGE and self.access_tier is None:
            raise ValueError("access_tier is required for BlobStorage accounts")
        if self.kind == AccountKind.STORAGE and self.access_tier is not None:
            raise ValueError("access_tier is not supported for Storage accounts")
        return self

    def name_for(self, prefix: str) -> str:
        """Build an account name from a generated prefix."""
        return f"{prefix}{self.suffix}"


class PlacedAccount(BaseModel):
    """A committed placement outcome."""

    model_config = ConfigDict(frozen=True)

    name: str
    cluster_id: str = ""


class ClusterAssignment(BaseModel):
    """An account and the cluster it lives on."""

    model_config = ConfigDict(frozen=True)

    account_name: str
    cluster_id: str


class ResourceGroup(BaseModel):
    """A deployment group holding storage accounts."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str


class AccountHandle(BaseModel):
    """Provider view of an existing storage account."""

    model_config = ConfigDict(frozen=True)

    name: str
    group_name: str
    location: str = ""
    blob_endpoint: Optional[str] = None
    tags: dict[str, str] = Field(default_factory=dict)


class ScopeKind(str, Enum):
    """What a cluster resolution or account listing covers."""

    ALL = "all"
    GROUP = "group"
    ACCOUNT = "account"


class AccountScope(BaseModel):
    """Scope of a cluster resolution."""

    model_config = ConfigDict(frozen=True)

    kind: ScopeKind
    group_name: Optional[str] = None
    account_name: Optional[str] = None

    @classmethod
    def subscription(cls) -> AccountScope:
        return cls(kind=ScopeKind.ALL)

    @classmethod
    def group(cls, group_name: str) -> AccountScope:
        return cls(kind=ScopeKind.GROUP, group_name=group_name)

    @classmethod
    def account(cls, group_name: Optional[str], account_name: str) -> AccountScope:
        return cls(kind=ScopeKind.ACCOUNT, group_name=group_name, account_name=account_name)

    def describe(self) -> str:
        """Human readable scope description for logs and errors."""
        if self.kind == ScopeKind.ACCOUNT:
            return f"account '{self.account_name}' in group '{self.group_name}'"
        if self.kind == ScopeKind.GROUP:
            return f"group '{self.group_name}'"
        return "subscription"
