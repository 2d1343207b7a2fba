from .field_mapper import DEMO_ORDER, MappingDefaults, load_order_payload, map_order

__all__ = ["DEMO_ORDER", "MappingDefaults", "load_order_payload", "map_order"]
