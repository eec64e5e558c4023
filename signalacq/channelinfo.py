"""Table model of per-channel display information."""

from __future__ import annotations

from collections.abc import Callable, Iterable, MutableMapping
from dataclasses import asdict, dataclass, replace
from enum import Enum, IntEnum, IntFlag
from typing import Any

_COLORS = (
    "#ff0056", "#7e2dd2", "#00ae7e", "#fe8900", "#ff937e", "#6a826c",
    "#ff029d", "#00b917", "#7a4782", "#85a900", "#a42400", "#683d3b",
    "#bdc6ff", "#263400", "#bdd393", "#d5ff00", "#9e008e", "#001544",
    "#c28c9f", "#ff74a3", "#01d0ff", "#004754", "#e56ffe", "#788231",
    "#0e4ca1", "#91d0cb", "#be9970", "#968ae8", "#bb8800", "#43002c",
    "#deff74", "#00ffc6",
)

#: Key of the channel list in a settings mapping.
SETTINGS_GROUP = "Channels"


class Column(IntEnum):
    """Columns of the channel table."""

    NAME = 0
    VISIBILITY = 1
    GAIN = 2
    OFFSET = 3


class Role(Enum):
    """Aspect of a cell that is read or written."""

    DISPLAY = "display"
    EDIT = "edit"
    FOREGROUND = "foreground"
    CHECK_STATE = "check_state"


class CheckState(IntEnum):
    """State of a cell's check box."""

    UNCHECKED = 0
    CHECKED = 2


class ItemFlag(IntFlag):
    """Capabilities of a cell."""

    NONE = 0
    SELECTABLE = 1
    EDITABLE = 2
    USER_CHECKABLE = 16
    ENABLED = 32
    NEVER_HAS_CHILDREN = 128


@dataclass
class ChannelInfo:
    """Display information of one channel."""

    name: str
    visibility: bool = True
    color: str = _COLORS[0]
    gain: float = 1.0
    offset: float = 0.0
    gain_en: bool = False
    offset_en: bool = False

    @classmethod
    def default(cls, index: int) -> ChannelInfo:
        """Default information for the channel at ``index``."""
        return cls(name=f"Channel {index + 1}", color=_COLORS[index % len(_COLORS)])


_TEXT_ROLES = (Role.DISPLAY, Role.EDIT)
_ALL_ROLES = (Role.DISPLAY, Role.EDIT, Role.FOREGROUND, Role.CHECK_STATE)
_HEADERS = {
    Column.NAME: "Channel",
    Column.VISIBILITY: "Visible",
    Column.GAIN: "Gain",
    Column.OFFSET: "Offset",
}

Listener = Callable[[int, int, tuple[Role, ...]], Any]


def _check_state(flag: bool) -> CheckState:
    return CheckState.CHECKED if flag else CheckState.UNCHECKED


class ChannelInfoModel:
    """Holds name, colour, visibility, gain and offset for each channel.

    Information is never discarded when the channel count shrinks, so user
    entered values come back when channels reappear. Listeners are called as
    ``callback(first_row, last_row, roles)`` whenever data changes.
    """

    def __init__(self, number_of_channels: int = 0) -> None:
        if number_of_channels < 0:
            raise ValueError("number of channels cannot be negative")
        self._num_channels = 0
        self._infos: list[ChannelInfo] = []
        self._gain_or_offset_en = False
        self._listeners: list[Listener] = []
        self.set_num_of_channels(number_of_channels)

    @classmethod
    def from_names(cls, channel_names: Iterable[str]) -> ChannelInfoModel:
        """Model with one channel per name."""
        names = list(channel_names)
        model = cls(len(names))
        for row, name in enumerate(names):
            model.set_data(row, Column.NAME, name, Role.EDIT)
        return model

    def copy(self) -> ChannelInfoModel:
        """Independent copy of the information of the current channels."""
        other = ChannelInfoModel(self._num_channels)
        other._infos = [replace(info) for info in self._infos[: self._num_channels]]
        other._update_gain_or_offset_en()
        return other

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def _notify(self, first: int, last: int, roles: tuple[Role, ...]) -> None:
        for callback in list(self._listeners):
            callback(first, last, roles)

    def _notify_reset(self) -> None:
        if self._infos:
            self._notify(0, len(self._infos) - 1, _ALL_ROLES)

    def name(self, i: int) -> str:
        return self._infos[i].name

    def color(self, i: int) -> str:
        return self._infos[i].color

    def is_visible(self, i: int) -> bool:
        return self._infos[i].visibility

    def gain_en(self, i: int) -> bool:
        return self._infos[i].gain_en

    def gain(self, i: int) -> float:
        return self._infos[i].gain

    def offset_en(self, i: int) -> bool:
        return self._infos[i].offset_en

    def offset(self, i: int) -> float:
        return self._infos[i].offset

    def gain_or_offset_en(self) -> bool:
        """Whether any current channel has gain or offset enabled."""
        return self._gain_or_offset_en

    def channel_names(self) -> list[str]:
        return [info.name for info in self._infos[: self._num_channels]]

    def row_count(self) -> int:
        return self._num_channels

    def column_count(self) -> int:
        return len(Column)

    def flags(self, column: int) -> ItemFlag:
        base = ItemFlag.ENABLED | ItemFlag.NEVER_HAS_CHILDREN | ItemFlag.SELECTABLE
        if column == Column.NAME:
            return ItemFlag.EDITABLE | base
        if column == Column.VISIBILITY:
            return ItemFlag.USER_CHECKABLE | base
        if column in (Column.GAIN, Column.OFFSET):
            return ItemFlag.EDITABLE | ItemFlag.USER_CHECKABLE | base
        return ItemFlag.NONE

    def data(self, row: int, column: int, role: Role = Role.DISPLAY) -> Any:
        """Value of a cell for ``role``; ``None`` if there is none."""
        if not 0 <= row < self._num_channels:
            return None
        info = self._infos[row]

        if role is Role.FOREGROUND:
            return info.color

        if column == Column.NAME:
            if role in _TEXT_ROLES:
                return info.name
        elif column == Column.VISIBILITY:
            if role is Role.CHECK_STATE:
                return _check_state(info.visibility)
        elif column == Column.GAIN:
            if role is Role.CHECK_STATE:
                return _check_state(info.gain_en)
            if role in _TEXT_ROLES:
                return info.gain
        elif column == Column.OFFSET:
            if role is Role.CHECK_STATE:
                return _check_state(info.offset_en)
            if role in _TEXT_ROLES:
                return info.offset
        return None

    def header_data(
        self, section: int, horizontal: bool = True, role: Role = Role.DISPLAY
    ) -> str | None:
        """Column titles when horizontal, 1-based channel numbers otherwise."""
        if role is not Role.DISPLAY:
            return None
        if horizontal:
            try:
                return _HEADERS[Column(section)]
            except ValueError:
                return None
        if section < self._num_channels:
            return str(section + 1)
        return None

    def set_data(
        self, row: int, column: int, value: Any, role: Role = Role.EDIT
    ) -> bool:
        """Write a cell; return whether anything was set."""
        if not 0 <= row < self._num_channels:
            return False
        info = self._infos[row]

        if role is Role.FOREGROUND:
            info.color = str(value)
            self._notify(row, row, (Role.FOREGROUND,))
            return True

        changed = False
        if column == Column.NAME:
            if role in _TEXT_ROLES:
                info.name = str(value)
                changed = True
        elif column == Column.VISIBILITY:
            if role is Role.CHECK_STATE:
                info.visibility = value == CheckState.CHECKED
                changed = True
        elif column in (Column.GAIN, Column.OFFSET):
            is_gain = column == Column.GAIN
            if role in _TEXT_ROLES:
                if is_gain:
                    info.gain = float(value)
                else:
                    info.offset = float(value)
                changed = True
            elif role is Role.CHECK_STATE:
                checked = value == CheckState.CHECKED
                if is_gain:
                    info.gain_en = checked
                else:
                    info.offset_en = checked
                if self._gain_or_offset_en != checked:
                    self._update_gain_or_offset_en()
                changed = True

        if changed:
            self._notify(row, row, (role,))
        return changed

    def set_num_of_channels(self, number: int) -> None:
        """Change the channel count; newly shown channels become visible."""
        if number < 0:
            raise ValueError("number of channels cannot be negative")
        if number == self._num_channels:
            return
        for ci in range(len(self._infos), number):
            self._infos.append(ChannelInfo.default(ci))
        for ci in range(self._num_channels, number):
            self._infos[ci].visibility = True
        self._num_channels = number
        self._update_gain_or_offset_en()

    def reset_infos(self) -> None:
        self._infos = [ChannelInfo.default(ci) for ci in range(len(self._infos))]
        self._update_gain_or_offset_en()
        self._notify_reset()

    def reset_names(self) -> None:
        for ci, info in enumerate(self._infos):
            info.name = ChannelInfo.default(ci).name
        self._notify_reset()

    def reset_colors(self) -> None:
        for ci, info in enumerate(self._infos):
            info.color = ChannelInfo.default(ci).color
        self._notify_reset()

    def reset_visibility(self, visible: bool) -> None:
        for info in self._infos:
            info.visibility = visible
        self._notify_reset()

    def reset_gains(self) -> None:
        for ci, info in enumerate(self._infos):
            default = ChannelInfo.default(ci)
            info.gain = default.gain
            info.gain_en = default.gain_en
        self._update_gain_or_offset_en()
        self._notify_reset()

    def reset_offsets(self) -> None:
        for ci, info in enumerate(self._infos):
            default = ChannelInfo.default(ci)
            info.offset = default.offset
            info.offset_en = default.offset_en
        self._update_gain_or_offset_en()
        self._notify_reset()

    def _update_gain_or_offset_en(self) -> None:
        self._gain_or_offset_en = any(
            info.gain_en or info.offset_en
            for info in self._infos[: self._num_channels]
        )

    def save_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Store the information of all known channels, shown or not."""
        settings[SETTINGS_GROUP] = [asdict(info) for info in self._infos]

    def load_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Load channel information; missing fields take their defaults."""
        for ci, entry in enumerate(settings.get(SETTINGS_GROUP, [])):
            default = ChannelInfo.default(ci)
            info = ChannelInfo(
                name=str(entry.get("name", default.name)),
                visibility=bool(entry.get("visibility", default.visibility)),
                color=str(entry.get("color", default.color)),
                gain=float(entry.get("gain", default.gain)),
                offset=float(entry.get("offset", default.offset)),
                gain_en=bool(entry.get("gain_en", default.gain_en)),
                offset_en=bool(entry.get("offset_en", default.offset_en)),
            )
            if ci < len(self._infos):
                self._infos[ci] = info
                if ci < self._num_channels:
                    self._notify(ci, ci, _ALL_ROLES)
            else:
                self._infos.append(info)
        self._update_gain_or_offset_en()