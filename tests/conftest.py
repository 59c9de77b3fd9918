"""
Pytest configuration and shared fixtures for the policy library tests.

Provides:
- Environment defaults applied before the library is imported
- Sample policy documents, both as records and as raw JSON
- metric_value(): read a counter sample from the library's registry
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Add the project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read once at import time
os.environ.setdefault("IAMPOLICY_APP_ENV", "test")
os.environ.setdefault("IAMPOLICY_METRICS_ENABLED", "true")

import pytest  # noqa: E402 (import after env setup)

from iampolicy.core.observability import metrics  # noqa: E402 (import after env setup)
from iampolicy.schemas import Policy, Statement  # noqa: E402 (import after env setup)


def metric_value(name: str, labels: dict[str, str]) -> float:
    """Current value of a counter sample; 0.0 if it was never incremented."""
    return metrics.registry.get_sample_value(name, labels) or 0.0


@pytest.fixture
def assume_role_policy() -> Policy:
    """Trust policy letting EC2 and the account root assume a role."""
    return Policy(
        version="2012-10-17",
        statements=[
            Statement(
                sid="TrustEc2",
                effect="Allow",
                action="sts:AssumeRole",
                principal={
                    "Service": "ec2.amazonaws.com",
                    "AWS": ["arn:aws:iam::123456789012:root"],
                },
                condition={"Bool": {"aws:SecureTransport": "true"}},
            )
        ],
    )


@pytest.fixture
def assume_role_policy_json() -> bytes:
    """The same trust policy as written by hand: different key order and layout."""
    return b"""
    {
        "Statement": [
            {
                "Condition": {"Bool": {"aws:SecureTransport": "true"}},
                "Principal": {
                    "AWS": "arn:aws:iam::123456789012:root",
                    "Service": "ec2.amazonaws.com"
                },
                "Action": "sts:AssumeRole",
                "Effect": "Allow",
                "Sid": "TrustEc2"
            }
        ],
        "Version": "2012-10-17"
    }
    """


@pytest.fixture
def s3_read_policy_json() -> bytes:
    """Policy with list-valued attributes and a Deny statement using NotAction."""
    return b"""
    {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "ReadBucket",
                "Effect": "Allow",
                "Action": ["s3:GetObject", "s3:ListBucket"],
                "Resource": ["arn:aws:s3:::reports", "arn:aws:s3:::reports/*"]
            },
            {
                "Effect": "Deny",
                "NotAction": "s3:*",
                "NotResource": "arn:aws:s3:::reports/*",
                "Condition": {"IpAddress": {"aws:SourceIp": ["10.0.0.0/8", "192.168.0.0/16"]}}
            }
        ]
    }
    """
