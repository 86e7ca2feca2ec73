from typing import Dict, List, Set

from robot_console.models.common import Identifier


class TreeExpansion:
    """Open/closed state of the work plan and RFID tag rows of a tree view"""

    def __init__(self):
        self.plans: Set[Identifier] = set()
        self.rfids: Dict[Identifier, List[Identifier]] = {}

    def toggle_plan(self, plan_id: Identifier) -> bool:
        if plan_id in self.plans:
            self.plans.discard(plan_id)
        else:
            self.plans.add(plan_id)
        return plan_id in self.plans

    def toggle_rfid(self, plan_id: Identifier, rfid_id: Identifier) -> bool:
        current = self.rfids.get(plan_id, [])
        if rfid_id in current:
            current = [open_id for open_id in current if open_id != rfid_id]
        else:
            current = current + [rfid_id]

        if current:
            self.rfids[plan_id] = current
        else:
            self.rfids.pop(plan_id, None)
        return rfid_id in current

    def is_plan_open(self, plan_id: Identifier) -> bool:
        return plan_id in self.plans

    def is_rfid_open(self, plan_id: Identifier, rfid_id: Identifier) -> bool:
        return rfid_id in self.rfids.get(plan_id, [])


class SingleExpansion:
    """At most one open plan and, inside it, at most one open location"""

    def __init__(self):
        self.plan_id = None
        self.location_id = None

    def toggle_plan(self, plan_id: Identifier):
        self.plan_id = None if self.plan_id == plan_id else plan_id
        self.location_id = None

    def toggle_location(self, location_id: Identifier):
        self.location_id = None if self.location_id == location_id else location_id
