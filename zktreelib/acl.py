"""ACL codec for ZKTreeLib.

Converts between the textual ACL form used on the command line and by
automation, and structured ACLEntry lists.

Text format:
    scheme:id:perm[,scheme:id:perm...]
    digest:user:pwdhash:perm

where perm is either a number (clamped to 31) or a subset of the letters
r, w, c, d, a.
"""

import base64
import hashlib
import math
from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, List

from .errors import ACLParseError


class Perm(IntFlag):
    """Permission bits of an ACL entry."""
    READ = 1
    WRITE = 2
    CREATE = 4
    DELETE = 8
    ADMIN = 16
    ALL = 31


MAX_PERMS = int(Perm.ALL)

# Letter -> bit used when parsing.
_PERM_LETTERS = {
    'r': Perm.READ,
    'w': Perm.WRITE,
    'c': Perm.CREATE,
    'd': Perm.DELETE,
    'a': Perm.ADMIN,
}

# Rendering order. Existing tooling parses this exact order; keep it.
_RENDER_ORDER = (
    ('c', Perm.CREATE),
    ('d', Perm.DELETE),
    ('r', Perm.READ),
    ('w', Perm.WRITE),
    ('a', Perm.ADMIN),
)


@dataclass(frozen=True)
class ACLEntry:
    """One access rule attached to a node.

    For the digest scheme, id is "user:passwordhash".
    """
    scheme: str
    id: str
    perms: Perm

    def __str__(self) -> str:
        return f"{self.scheme}:{self.id}:{format_perms(self.perms)}"


def parse_perms(text: str) -> Perm:
    """Parse a permission field.

    A non-negative number yields min(number, 31), truncated; anything else
    is read as permission letters.

    Args:
        text: Permission field, e.g. "31", "rw" or "cdrwa"

    Returns:
        The permission bitmask

    Raises:
        ACLParseError: If a letter outside "rwcda" is found
    """
    number = None
    # float() also accepts surrounding whitespace and digit underscores
    if text == text.strip() and '_' not in text:
        try:
            number = float(text)
        except ValueError:
            pass

    if number is not None and not math.isnan(number) and number >= 0:
        return Perm(int(min(number, MAX_PERMS)))

    perms = Perm(0)
    for letter in text:
        try:
            perms |= _PERM_LETTERS[letter]
        except KeyError:
            raise ACLParseError(
                f"invalid ACL string specified: unknown permission {letter!r} in {text!r}",
                text
            ) from None
    return perms


def parse_acl(text: str) -> List[ACLEntry]:
    """Parse comma-separated ACL text into entries.

    Order is preserved and duplicates are kept. Parsing stops at the first
    invalid entry and nothing is returned for it.

    Raises:
        ACLParseError: If any entry is malformed
    """
    acl = []
    for entry in text.split(','):
        parts = entry.split(':')
        if len(parts) > 3 and parts[0] == 'digest':
            scheme = parts[0]
            identity = f"{parts[1]}:{parts[2]}"
            perms_text = parts[3]
        elif len(parts) >= 3:
            scheme, identity, perms_text = parts[0], parts[1], parts[2]
        else:
            raise ACLParseError(
                f"invalid ACL entry {entry!r}: expected scheme:id:perms", text
            )
        acl.append(ACLEntry(scheme, identity, parse_perms(perms_text)))
    return acl


def format_perms(perms: int) -> str:
    """Render permission bits as letters in "cdrwa" order."""
    return ''.join(letter for letter, bit in _RENDER_ORDER if perms & bit)


def format_acl(acl: Iterable[ACLEntry]) -> List[str]:
    """Render entries as "scheme:id:letters" strings."""
    return [str(entry) for entry in acl]


def world_acl(perms: int = Perm.ALL) -> List[ACLEntry]:
    """ACL granting perms to everyone."""
    return [ACLEntry('world', 'anyone', Perm(perms))]


def digest_credential(user: str, password: str) -> str:
    """Return the "user:base64(sha1(user:password))" digest identity."""
    digest = hashlib.sha1(f"{user}:{password}".encode('utf-8')).digest()
    return f"{user}:{base64.b64encode(digest).decode('ascii')}"


def digest_acl(perms: int, user: str, password: str) -> ACLEntry:
    """Build a digest entry from a clear-text password."""
    return ACLEntry('digest', digest_credential(user, password), Perm(perms))


def build_digest_acl(user: str, password: str, perms_text: str) -> List[ACLEntry]:
    """Build one digest entry per comma-separated numeric permission value.

    Example:
        >>> build_digest_acl("alice", "secret", "31,1")  # doctest: +SKIP
        [ACLEntry(scheme='digest', id='alice:...', perms=<Perm.ALL: 31>), ...]

    Raises:
        ACLParseError: If a value is not an integer
    """
    acl = []
    for value in perms_text.split(','):
        try:
            if value != value.strip() or '_' in value:
                raise ValueError(value)
            perms = int(value)
        except ValueError:
            raise ACLParseError(f"invalid numeric permission {value!r}", perms_text) from None
        acl.append(digest_acl(min(max(perms, 0), MAX_PERMS), user, password))
    return acl


__all__ = [
    'Perm',
    'ACLEntry',
    'parse_perms',
    'parse_acl',
    'format_perms',
    'format_acl',
    'world_acl',
    'digest_credential',
    'digest_acl',
    'build_digest_acl',
]
