"""List of available serial ports plus ports entered by the user."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any


class PortIcon(Enum):
    """Icon shown for a port, chosen from its kind."""

    USB = "usb"
    BLUETOOTH = "bluetooth"
    RS232 = "rs232"


class PortListItem:
    """One entry of the port list: display text, icon and port name."""

    def __init__(self, name: str, description: str = "", vid: int = 0, pid: int = 0) -> None:
        text = name
        if description:
            text += " " + description
        # internal or RS232 ports may also carry VID and PID
        if vid and pid and "tty" not in name:
            text += f"[{vid:04x}:{pid:04x}]"
            self.icon = PortIcon.USB
        elif "rfcomm" in name:
            self.icon = PortIcon.BLUETOOTH
        else:
            self.icon = PortIcon.RS232
        self.text = text
        self._port_name = name

    @classmethod
    def from_port_info(cls, port_info: Any) -> PortListItem:
        """Build an item from a port description such as pyserial's ``ListPortInfo``."""
        name = getattr(port_info, "name", None) or port_info.device
        pid = getattr(port_info, "pid", None)
        if pid is not None:
            return cls(
                name,
                getattr(port_info, "description", "") or "",
                getattr(port_info, "vid", 0) or 0,
                pid,
            )
        return cls(name)

    def port_name(self) -> str:
        """The bare port name, without description."""
        return self._port_name


def _system_ports() -> Iterable[Any]:
    from serial.tools import list_ports

    return list_ports.comports()


class PortList:
    """Ports found on the system followed by ports the user entered."""

    def __init__(self, port_provider: Callable[[], Iterable[Any]] | None = None) -> None:
        self._port_provider = port_provider or _system_ports
        self._user_entered_ports: list[str] = []
        self._items: list[PortListItem] = []
        self.load_port_list()

    def load_port_list(self) -> None:
        """Rebuild the list from the system ports and the user entered ports."""
        items = [PortListItem.from_port_info(info) for info in self._port_provider()]
        items.extend(PortListItem(name) for name in self._user_entered_ports)
        self._items = items

    def items(self) -> list[PortListItem]:
        return list(self._items)

    def index_of(self, port_text: str) -> int | None:
        """Index of the item with this display text, or ``None``."""
        return next(
            (i for i, item in enumerate(self._items) if item.text == port_text), None
        )

    def index_of_name(self, port_name: str) -> int | None:
        """Index of the item with this port name, or ``None``."""
        return next(
            (i for i, item in enumerate(self._items) if item.port_name() == port_name),
            None,
        )

    def add_user_port(self, port_text: str) -> int:
        """Add a port typed in by the user; it is kept across reloads."""
        self._items.append(PortListItem(port_text))
        self._user_entered_ports.append(port_text)
        return len(self._items) - 1