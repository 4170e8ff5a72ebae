from pydash import has


def format_key(key):
    # format keys into abc_def_ghi
    return (
        key.strip()
        .replace(" ", "_")
        .replace("/", "_")
        .replace("(", "")
        .replace(")", "")
        .replace("*", "_")
        .replace(",", "")
        .lower()
    )


def has_many(obj, base, keys):
    """
    Check that obj has every key, optionally below base

    Parameters
    ----------
    obj : dict
      object to look in

    base : str
      dotted path prefix, falsy to look at the top level

    keys : list
      keys that must exist

    Returns
    -------
    True if all keys exist, False otherwise
    """
    for key in keys:
        lookup = ""
        if base:
            lookup += base + "."
        lookup += key
        if not has(obj, lookup):
            return False
    return True


def env_list(value):
    # "a, b,,c" -> ['a', 'b', 'c']
    if not value:
        return list()
    return [x.strip() for x in value.split(",") if x.strip()]


def env_int(value, default):
    if value is None or not value.strip():
        return default
    return int(value.strip())
