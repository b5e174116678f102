"""
Partner API - ORM Models
=========================

Importing this package registers every model with `Base.metadata`
(Alembic autogenerate and the test suite's create_all rely on that).
"""

from partner_api.models.partner import Partner
from partner_api.models.service_offer import ServiceOffer

__all__ = ["Partner", "ServiceOffer"]
