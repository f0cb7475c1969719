from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver

_originals = {}


def _get_setting(name, default):
    try:
        return getattr(settings, name, default)
    except ImproperlyConfigured:
        # Used outside a Django project.
        return default


# -- tokenizer

# The amount of characters (or bytes) that are fed to the XML tokenizer at once.
# The events of each chunk are handed to the parser before the next chunk is read.
GPXPARSER_CHUNK_SIZE = _get_setting("GPXPARSER_CHUNK_SIZE", 64 * 1024)

# Whether documents with a <!DOCTYPE ...> declaration are rejected.
# Entity declarations and external references are always rejected.
GPXPARSER_FORBID_DTD = _get_setting("GPXPARSER_FORBID_DTD", True)

# -- values

# Whether the whitespace around text values (e.g. <name>) is removed.
GPXPARSER_STRIP_TEXT = _get_setting("GPXPARSER_STRIP_TEXT", True)


@receiver(setting_changed)
def _on_settings_change(setting, value, enter, **kwargs):
    if not setting.startswith("GPXPARSER_"):
        return

    conf_module = globals()
    if value is None and not enter:
        # override_settings().disable() returns what the django settings module had.
        # Revert to our defaults here instead.
        value = _originals.get(setting)
    else:
        # Track defaults of this file for reverting to them
        _originals.setdefault(setting, conf_module[setting])

    conf_module[setting] = value
