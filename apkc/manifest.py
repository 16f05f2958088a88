"""Reading the parts of AndroidManifest.xml needed to launch an app."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from os import PathLike

MAIN_ACTION = "android.intent.action.MAIN"


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _attr(element: ET.Element, name: str) -> str:
    for key, value in element.attrib.items():
        if _local(key) == name:
            return value
    return ""


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


@dataclass
class Action:
    name: str = ""


@dataclass
class IntentFilter:
    actions: list[Action] = field(default_factory=list)


@dataclass
class Activity:
    name: str = ""
    intent_filters: list[IntentFilter] = field(default_factory=list)


@dataclass
class Application:
    activities: list[Activity] = field(default_factory=list)

    def main_activity(self) -> str:
        """Name of the first activity with a MAIN action, or an empty string."""
        for activity in self.activities:
            for intent_filter in activity.intent_filters:
                if any(action.name == MAIN_ACTION for action in intent_filter.actions):
                    return activity.name
        return ""


@dataclass
class Manifest:
    package: str = ""
    application: Application = field(default_factory=Application)


def _parse_activity(element: ET.Element) -> Activity:
    return Activity(
        name=_attr(element, "name"),
        intent_filters=[
            IntentFilter(actions=[Action(name=_attr(a, "name")) for a in _children(f, "action")])
            for f in _children(element, "intent-filter")
        ],
    )


def parse_manifest(data: str | bytes) -> Manifest:
    """Parse manifest XML; raise ValueError if it is not a manifest document."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ValueError(f"invalid manifest XML: {exc}") from exc
    if _local(root.tag) != "manifest":
        raise ValueError(f"expected element <manifest>, found <{_local(root.tag)}>")

    applications = _children(root, "application")
    application = Application()
    if applications:
        application.activities = [
            _parse_activity(a) for a in _children(applications[-1], "activity")
        ]
    return Manifest(package=_attr(root, "package"), application=application)


def read_manifest(path: str | PathLike[str]) -> Manifest:
    """Read and parse a manifest file."""
    with open(path, "rb") as fh:
        return parse_manifest(fh.read())