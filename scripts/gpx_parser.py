import io
import re
from typing import List

import gpxpy
import gpxpy.gpx
import pandas as pd

from scripts.log import get_logger
from scripts.track.errors import InvalidGpxError
from scripts.track.models import RawPoint

logger = get_logger(__name__)

XML_ENCODING_RE = re.compile(rb"""^\s*<\?xml[^>]*encoding=["']([A-Za-z0-9._-]+)["']""")
XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def _decode(content: bytes) -> str:
    """Decode GPX bytes as UTF-8, or with the encoding the XML declaration names."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        utf8_error = e

    match = XML_ENCODING_RE.match(content)
    if match is None:
        raise InvalidGpxError(f"GPX data is not valid UTF-8: {utf8_error}")

    encoding = match.group(1).decode("ascii")
    try:
        text = content.decode(encoding)
    except (LookupError, UnicodeDecodeError) as e:
        raise InvalidGpxError(f"Could not decode GPX data as {encoding}: {e}") from e
    # The text is already decoded; the declaration would name the wrong encoding.
    return XML_DECLARATION_RE.sub("", text, count=1)


class GPXParser:
    """Parse GPX data into raw track points."""

    def __init__(self, gpx_source):
        """
        Initialize the GPX parser.

        Parameters
        ----------
        gpx_source : str | bytes | file-like object
            The GPX data source, which can be:
            - A file path to a GPX file (str)
            - GPX file content as bytes
            - A file-like object (e.g., from an upload widget)
        """
        self.gpx_source = gpx_source
        self.raw_points: List[RawPoint] = []

    def _read_text(self) -> str:
        if isinstance(self.gpx_source, (bytes, bytearray)):
            return _decode(bytes(self.gpx_source))
        if hasattr(self.gpx_source, "read"):  # File-like object
            content = self.gpx_source.read()
            return _decode(content) if isinstance(content, bytes) else content
        if isinstance(self.gpx_source, str):  # File path
            with open(self.gpx_source, "rb") as f:
                return _decode(f.read())
        raise InvalidGpxError("Unsupported GPX source type.")

    def parse(self) -> List[RawPoint]:
        """
        Parse every track point of every track and track segment.

        Returns
        -------
        list[RawPoint]
            Points in recording order. Missing elevation becomes 0.0,
            missing time becomes None.

        Raises
        ------
        InvalidGpxError
            If the source is unsupported, is not valid GPX, or the parsed
            track is empty.
        """
        gpx_text = self._read_text()
        try:
            gpx = gpxpy.parse(io.StringIO(gpx_text))
        except gpxpy.gpx.GPXException as e:
            raise InvalidGpxError(f"Could not parse GPX data: {e}") from e

        points: List[RawPoint] = []
        for track in gpx.tracks:
            for segment in track.segments:
                for point in segment.points:
                    points.append(
                        RawPoint(
                            lat=point.latitude,
                            lon=point.longitude,
                            ele=point.elevation if point.elevation is not None else 0.0,
                            time=point.time,
                        )
                    )

        if not points:
            raise InvalidGpxError("No points found in the GPX track.")

        logger.debug("parsed %d track points", len(points))
        self.raw_points = points
        return points

    def parse_to_dataframe(self) -> pd.DataFrame:
        """
        Parse the GPX data into a pandas DataFrame with columns
        'lat', 'lon', 'ele' and 'time'.
        """
        points = self.raw_points or self.parse()
        return pd.DataFrame(
            [[p.lat, p.lon, p.ele, p.time] for p in points],
            columns=["lat", "lon", "ele", "time"],
        )
