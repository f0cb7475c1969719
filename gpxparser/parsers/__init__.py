"""All parser logic to process incoming GPX data.

This handles all tags of GPX 1.1, including:

* ``<gpx>`` and ``<metadata>``
* ``<wpt>``, ``<rte>`` and ``<trk>``
* ``<extensions>``, which are skipped

Internally, the XML is translated into a stream of events,
which the element classes consume into a tree of typed Python objects.
"""
