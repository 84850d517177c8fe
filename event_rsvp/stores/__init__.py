from event_rsvp.stores.interfaces import EventStore
from event_rsvp.stores.sqlalchemy_store import SqlAlchemyEventStore

__all__ = ["EventStore", "SqlAlchemyEventStore"]
