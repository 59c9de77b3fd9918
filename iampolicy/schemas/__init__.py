"""
Pydantic models for IAM-style policy documents.

Wire names (``Version``, ``Statement``, ``Sid``, ``Effect``, ...) are the
field aliases; records may also be built from the Python field names.
"""

# Re-export schemas for convenient imports.
from .policy import Policy as Policy
from .policy import Statement as Statement
