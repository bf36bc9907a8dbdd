# Keyed, one-way hashing of identifiers. The same UID always maps to the same pseudonym for a
# given seed (so clients can still track an event across refreshes), but the original can't be
# recovered without the seed.

import hashlib
import hmac

from icstools.errors import HashInitFailed, MissingSeed


def _as_bytes(seed):
    return seed.encode("utf-8") if isinstance(seed, str) else seed


def _new_hasher(seed):
    if not seed:
        raise MissingSeed()
    try:
        return hmac.new(_as_bytes(seed), digestmod=hashlib.sha256)
    except (TypeError, ValueError) as e:
        # The seed itself must never end up in an error message
        raise HashInitFailed(f"Could not initialise HMAC-SHA256 with the configured seed ({type(e).__name__})") from e


def check_seed(seed):
    """
    Makes sure the given seed can be used for pseudonymizing, so a bad configuration is caught
    at startup rather than on the first request.
    """

    _new_hasher(seed)


def pseudonymize(seed, identifier: str) -> str:
    """
    Returns the lower-case hex HMAC-SHA256 of the given identifier, keyed with the given seed.
    """

    hasher = _new_hasher(seed)
    hasher.update(identifier.encode("utf-8"))
    return hasher.hexdigest()
