import io

import pandas as pd
import pytest

from scripts.gpx_parser import GPXParser
from scripts.track.errors import InvalidGpxError

VALID_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="pytest">
  <trk><name>Ski day</name><trkseg>
    <trkpt lat="46.54530" lon="7.98200"><ele>2200.0</ele><time>2024-02-10T09:00:00Z</time></trkpt>
    <trkpt lat="46.54500" lon="7.98250"><ele>2185.0</ele><time>2024-02-10T09:00:05Z</time></trkpt>
  </trkseg><trkseg>
    <trkpt lat="46.54470" lon="7.98300"><time>2024-02-10T09:00:10Z</time></trkpt>
    <trkpt lat="46.54440" lon="7.98350"><ele>2160.0</ele></trkpt>
  </trkseg></trk>
</gpx>
"""

EMPTY_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="pytest">
  <trk><name>Empty Track</name><trkseg>
  </trkseg></trk>
</gpx>
"""


def test_parse_from_str(tmp_path):
    """Parsing from source file (str)."""
    file_path = tmp_path / "test.gpx"
    file_path.write_text(VALID_GPX, encoding="utf-8")

    points = GPXParser(str(file_path)).parse()

    assert len(points) == 4
    assert points[0].lat == pytest.approx(46.5453)
    assert points[0].ele == 2200.0
    assert points[1].time.second == 5


def test_parse_from_bytes():
    points = GPXParser(VALID_GPX.encode("utf-8")).parse()
    assert points[1].ele == 2185.0


def test_parse_from_filelike():
    """Parsing from file-like (e.g. upload)."""
    points = GPXParser(io.BytesIO(VALID_GPX.encode("utf-8"))).parse()
    assert points[-1].lon == pytest.approx(7.9835)


def test_missing_elevation_and_time():
    points = GPXParser(VALID_GPX.encode("utf-8")).parse()
    assert points[2].ele == 0.0
    assert points[3].time is None


def test_empty_gpx_raises(tmp_path):
    """Empty track should give InvalidGpxError (a ValueError)."""
    file_path = tmp_path / "empty.gpx"
    file_path.write_text(EMPTY_GPX, encoding="utf-8")

    parser = GPXParser(str(file_path))
    with pytest.raises(ValueError, match="No points found"):
        parser.parse()
    with pytest.raises(InvalidGpxError):
        parser.parse()


def test_invalid_xml_raises():
    with pytest.raises(InvalidGpxError):
        GPXParser(b"<gpx><trk>").parse()


def test_unsupported_source_type():
    with pytest.raises(InvalidGpxError, match="Unsupported"):
        GPXParser(12345).parse()


def test_parse_to_dataframe():
    df = GPXParser(VALID_GPX.encode("utf-8")).parse_to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["lat", "lon", "ele", "time"]
    assert len(df) == 4


LATIN1_GPX = """<?xml version="1.0" encoding="ISO-8859-1"?>
<gpx version="1.1" creator="pytest">
  <trk><name>Zürs - Lech</name><trkseg>
    <trkpt lat="47.16900" lon="10.16900"><ele>1720.0</ele><time>2024-02-10T09:00:00Z</time></trkpt>
    <trkpt lat="47.16850" lon="10.16950"><ele>1705.0</ele><time>2024-02-10T09:00:05Z</time></trkpt>
  </trkseg></trk>
</gpx>
"""


def test_parse_latin1_bytes_uses_declared_encoding():
    points = GPXParser(LATIN1_GPX.encode("latin-1")).parse()
    assert len(points) == 2
    assert points[1].ele == 1705.0


def test_parse_latin1_file(tmp_path):
    file_path = tmp_path / "zuers.gpx"
    file_path.write_bytes(LATIN1_GPX.encode("latin-1"))
    assert len(GPXParser(str(file_path)).parse()) == 2


def test_undecodable_bytes_raise_invalid_gpx():
    with pytest.raises(InvalidGpxError, match="not valid UTF-8"):
        GPXParser(b"<gpx>\xff\xfe</gpx>").parse()
