"""Table walk engine.

``walkf`` is the primitive: walk a subtree and hand every row of the expected
type to a callback. ``walk_column`` builds on it and keys each row by the
index carried in its OID, so that columns of the same table walked
separately can be joined without trusting the agent to return them in the
same order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any

from loguru import logger

from qbridgectl.exceptions import SwitchError
from qbridgectl.snmp.oids import extract_row_key
from qbridgectl.snmp.transport import BaseTransport, ValueKind, Varbind

RowCallback = Callable[[int, Varbind], None]
KeyFunc = Callable[[str], int]


def walkf(session: BaseTransport, oid: str, kind: ValueKind, callback: RowCallback) -> int:
    """Walk the subtree at ``oid`` and call ``callback(position, varbind)`` per matching row.

    Rows of another type are skipped (the position still counts them, as
    it is the position in the agent's response). An exception raised by the
    callback aborts the walk and propagates unchanged.

    Returns:
        The number of rows handed to the callback.
    """
    handled = 0
    for position, varbind in enumerate(session.walk(oid)):
        if varbind.kind is not kind:
            continue
        callback(position, varbind)
        handled += 1
    return handled


class WalkStatus(Enum):
    PRESENT = "present"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass
class WalkResult:
    """Outcome of one column walk: rows keyed by row index, or why there are none."""

    oid: str
    status: WalkStatus
    rows: dict[int, Any] = field(default_factory=dict)
    error: SwitchError | None = None

    def require(self, what: str) -> dict[int, Any]:
        """Return the rows; a failed or absent column is an error."""
        if self.status is WalkStatus.FAILED:
            assert self.error is not None
            raise self.error
        if self.status is WalkStatus.ABSENT:
            raise SwitchError(f"{what} ({self.oid}) returned no rows")
        return self.rows

    def optional(self) -> dict[int, Any]:
        """Return the rows, or an empty dict when the column is absent. Failures still raise."""
        if self.status is WalkStatus.FAILED:
            assert self.error is not None
            raise self.error
        return self.rows


def walk_column(
    session: BaseTransport,
    oid: str,
    kind: ValueKind,
    key: KeyFunc | None = None,
) -> WalkResult:
    """Walk one table column and key its rows.

    Args:
        session: Transport to walk with.
        oid: Column OID.
        kind: Value type to accept; rows of other types are ignored.
        key: Extracts the row key from a row OID. Defaults to the trailing
            component below ``oid``.
    """
    key_func = key or partial(extract_row_key, prefix=oid)
    rows: dict[int, Any] = {}

    def _collect(_: int, varbind: Varbind) -> None:
        rows[key_func(varbind.oid)] = varbind.value

    try:
        walkf(session, oid, kind, _collect)
    except SwitchError as e:
        logger.debug(f"walk of {oid} failed: {e}")
        return WalkResult(oid, WalkStatus.FAILED, rows, e)

    if not rows:
        return WalkResult(oid, WalkStatus.ABSENT)
    return WalkResult(oid, WalkStatus.PRESENT, rows)


def get_scalar(session: BaseTransport, oid: str, kind: ValueKind = ValueKind.INTEGER) -> Any:
    """GET a scalar, returning ``None`` when the agent does not have it.

    ``INTEGER`` also accepts ``Gauge32``/``Counter`` values, as agents differ
    in the type they use for counts such as ``ifNumber``.
    """
    accepted = {kind}
    if kind is ValueKind.INTEGER:
        accepted |= {ValueKind.GAUGE, ValueKind.COUNTER}
    for varbind in session.get(oid):
        if varbind.kind in accepted:
            return varbind.value
    return None
