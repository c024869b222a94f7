from .slots import Slot, SlotStatus


__all__ = ["Slot", "SlotStatus"]
