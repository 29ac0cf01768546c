#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name
"""
Helpers for turning Python values into D-Bus arguments and back.

There are two ways an object reaches the wire. Plain values go through
dbus_prepare(), which infers a signature and wraps Variants where needed.
Remote objects (devices, profiles, sensors) are never expanded: they are
sent by reference, as their object path.
"""
import enum

from dbus_fast import Variant
from dbus_fast.validators import is_object_path_valid
from frozendict import frozendict

from colormgr.errors import DecodeError, InvalidPathError
from colormgr.log import Log


logger = Log.get("colormgr.dbus")

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


class Referenceable(object):
    """
    Mixin for objects which are sent over the bus by object path
    """

    __slots__ = ()

    @property
    def path(self) -> str:
        raise NotImplementedError


def object_reference(obj) -> str:
    """
    Encode a remote object as a reference argument (signature "o")

    :param obj: a Referenceable, or an object path string
    :return: the validated object path
    """
    if isinstance(obj, Referenceable):
        path = obj.path
    elif isinstance(obj, str):
        path = obj
    else:
        raise TypeError("Cannot send %r by reference" % (obj,))

    return check_object_path(path)


def check_object_path(path) -> str:
    """
    Raise InvalidPathError unless path is a valid D-Bus object path
    """
    if not isinstance(path, str) or not is_object_path_valid(path):
        raise InvalidPathError("Invalid object path: %r" % (path,))
    return path


def dbus_prepare(obj, variant: bool=False) -> tuple:
    """
    Recursively walks obj and builds a D-Bus signature
    by inspecting types. Variant types are created as
    necessary, and the returned obj may have changed.

    :param obj: An arbitrary primitive or container type
    :param variant: Force wrapping contained objects with variants
    :return: tuple of (prepared object, signature)
    """
    sig = ""

    try:
        if isinstance(obj, Variant):
            sig = "v"

        elif isinstance(obj, Referenceable):
            obj = object_reference(obj)
            sig = "o"

        elif isinstance(obj, bool):
            sig = "b"

        elif isinstance(obj, str):
            sig = "s"

        elif isinstance(obj, int):
            if INT32_MIN <= obj <= INT32_MAX:
                sig = "i"
            else:
                sig = "x"

        elif isinstance(obj, float):
            sig = "d"

        elif isinstance(obj, (bytes, bytearray)):
            obj = bytes(obj)
            sig = "ay"

        elif isinstance(obj, enum.Enum):
            # wire enums carry their string as value
            obj = obj.value if isinstance(obj.value, str) else obj.name.lower()
            sig = "s"

        elif isinstance(obj, tuple):
            if len(obj) == 0:
                raise ValueError("Empty structs cannot be sent")
            tmp = []
            sig = "("
            for item in obj:
                r_obj, r_sig = dbus_prepare(item)
                sig += r_sig
                tmp.append(r_obj)
            sig += ")"
            obj = tmp

        elif isinstance(obj, list):
            items = [x for x in obj if x is not None]
            if len(items) == 0:
                obj, sig = [], "av"
            elif not variant and all(type(x) is type(items[0]) for x in items):
                # all items same type
                prepared = [dbus_prepare(x) for x in items]
                sigs = {r_sig for _, r_sig in prepared}
                if len(sigs) == 1:
                    obj = [r_obj for r_obj, _ in prepared]
                    sig = "a" + sigs.pop()
                else:
                    obj = [Variant(r_sig, r_obj) for r_obj, r_sig in prepared]
                    sig = "av"
            else:
                # wrap items with variants
                obj = [_as_variant(x) for x in items]
                sig = "av"

        elif isinstance(obj, (dict, frozendict)):
            items = {str(k): v for k, v in obj.items() if v is not None}
            vals = list(items.values())
            if len(items) == 0:
                obj, sig = {}, "a{sv}"
            elif not variant and all(type(x) is type(vals[0]) for x in vals):
                # all values same type
                prepared = {k: dbus_prepare(v) for k, v in items.items()}
                sigs = {r_sig for _, r_sig in prepared.values()}
                if len(sigs) == 1:
                    obj = {k: r_obj for k, (r_obj, _) in prepared.items()}
                    sig = "a{s%s}" % sigs.pop()
                else:
                    obj = {k: Variant(r_sig, r_obj) for k, (r_obj, r_sig) in prepared.items()}
                    sig = "a{sv}"
            else:
                # wrap values with variants
                obj = {k: _as_variant(v) for k, v in items.items()}
                sig = "a{sv}"

        else:
            raise TypeError("Cannot send %s over D-Bus" % type(obj).__name__)

    except Exception as err:
        logger.debug("dbus_prepare failed: obj=%r sig=%s: %s", obj, sig, err)
        raise

    return obj, sig


def _as_variant(obj) -> Variant:
    r_obj, r_sig = dbus_prepare(obj)
    return Variant(r_sig, r_obj)


def prepare_variant_map(values: dict) -> dict:
    """
    Encode a loosely typed mapping as a{sv}

    Every value is wrapped in a Variant carrying its own signature.
    """
    obj, _ = dbus_prepare(dict(values), variant=True)
    return obj


def unwrap_variants(obj):
    """
    Recursively unwrap dbus_fast Variants.
    """
    if isinstance(obj, Variant):
        return unwrap_variants(obj.value)
    if isinstance(obj, dict):
        return {k: unwrap_variants(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [unwrap_variants(item) for item in obj]
    if isinstance(obj, tuple):
        return tuple(unwrap_variants(item) for item in obj)
    return obj


def check_signature(actual: str, expected, what: str) -> str:
    """
    Raise DecodeError unless a reply signature is acceptable

    :param actual: the signature found on the wire
    :param expected: a signature, or a tuple of acceptable signatures
    :param what: description of the value for the error message
    """
    if isinstance(expected, str):
        expected = (expected,)
    if actual not in expected:
        raise DecodeError("%s: expected signature %s, got %r" %
                          (what, " or ".join(repr(x) for x in expected), actual))
    return actual
