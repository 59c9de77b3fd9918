"""
IAM-style policy documents: records, a string-or-list field, and semantic JSON equality.

    from iampolicy import Policy, Statement, decode, encode, equal

    policy = Policy(
        version="2012-10-17",
        statements=[Statement(effect="Allow", action="iam:*", resource="*")],
    )
    data = encode(policy)
    assert equal(data, b'{"Statement": [{"Resource": "*", "Action": "iam:*", '
                       b'"Effect": "Allow"}], "Version": "2012-10-17"}')
    assert decode(data, Policy) == policy
"""

from iampolicy.codec import decode, encode
from iampolicy.compare import JsonDifference, differences, equal, fingerprint
from iampolicy.core.errors import EncodeError, PolicyError, TypeMismatchError
from iampolicy.domain.str_or_list import StrOrList
from iampolicy.schemas import Policy, Statement

__all__ = [
    "encode",
    "decode",
    "equal",
    "differences",
    "fingerprint",
    "JsonDifference",
    "Policy",
    "Statement",
    "StrOrList",
    "PolicyError",
    "TypeMismatchError",
    "EncodeError",
]
