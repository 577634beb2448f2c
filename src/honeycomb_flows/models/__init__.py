"""SQLAlchemy ORM models."""

# Import all models so Base.metadata registers them for create_all().
from honeycomb_flows.models.key_value import KeyValueEntry as KeyValueEntry
from honeycomb_flows.models.subscription import TriggerDelivery as TriggerDelivery
from honeycomb_flows.models.subscription import (
    TriggerSubscription as TriggerSubscription,
)
