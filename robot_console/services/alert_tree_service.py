from collections import OrderedDict
from typing import Any, Iterable, List
from loguru import logger

from robot_console.models.alert import (
    ALERT_TYPES, Alert, AlertLogTree, AlertSummary, RFIDAlertGroup, RFIDTag, WorkPlan,
)
from robot_console.models.common import Identifier, as_list, as_mapping, identifier


class AlertTreeService:
    def __init__(self):
        self.logger = logger

    def build_alert_tree(self, records: Iterable[Any]) -> "OrderedDict[Identifier, AlertLogTree]":
        """
        Group one page of alert-log records into work plan -> RFID tag -> alerts

        Work plans and tag groups keep the order in which they are first seen.
        Alerts are appended in arrival order and never deduplicated. Records
        without a usable work plan id, and tag groups without a usable tag id,
        are dropped.

        Args:
            records: The "data" array of an alert-logs page

        Returns:
            Ordered mapping of work plan id to its AlertLogTree
        """
        plans: "OrderedDict[Identifier, AlertLogTree]" = OrderedDict()
        groups: dict = {}

        for record in as_list(records):
            record = as_mapping(record)
            raw_plan = as_mapping(record.get("work_plan"))
            plan_id = identifier(raw_plan.get("work_plan_id"))
            if plan_id is None:
                self.logger.debug("Dropping alert-log record without a work plan id")
                continue

            node = plans.get(plan_id)
            if node is None:
                node = AlertLogTree(work_plan=WorkPlan.from_api(raw_plan, plan_id), rfid_tags=[])
                plans[plan_id] = node
                groups[plan_id] = {}
            plan_groups = groups[plan_id]

            for raw_group in as_list(record.get("rfid_tags")):
                raw_group = as_mapping(raw_group)
                raw_tag = as_mapping(raw_group.get("rfid_tag"))
                tag_id = identifier(raw_tag.get("rfid_tag_id"))
                if tag_id is None:
                    self.logger.debug(f"Dropping RFID group without a tag id in work plan {plan_id}")
                    continue

                group = plan_groups.get(tag_id)
                if group is None:
                    group = RFIDAlertGroup(rfid_tag=RFIDTag.from_api(raw_tag, tag_id), alerts=[])
                    plan_groups[tag_id] = group
                    node.rfid_tags.append(group)

                group.alerts.extend(Alert.from_api(raw_alert) for raw_alert in as_list(raw_group.get("alerts")))

        return plans

    def summarize_alerts(self, trees: Iterable[AlertLogTree]) -> AlertSummary:
        """Count alerts per type over the trees of the loaded page"""
        counts = dict.fromkeys(ALERT_TYPES, 0)
        total = 0
        for tree in trees:
            for group in tree.rfid_tags:
                total += len(group.alerts)
                for alert in group.alerts:
                    if alert.alert_type in counts:
                        counts[alert.alert_type] += 1
        return AlertSummary(total=total, **counts)

    def parse_alert_logs(self, records: Any) -> List[AlertLogTree]:
        return list(self.build_alert_tree(records).values())


# Create service instance
alert_tree_service = AlertTreeService()
