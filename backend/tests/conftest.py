"""Shared test fixtures."""

from __future__ import annotations

import pytest

from metre.engine.store import LayerStore
from metre.engine.workspace import Workspace
from metre.models.project import GeoPoint, Project


# Sample KML documents

FOLDER_POLYGON_KML = '''<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Parcelles</name>
    <Folder>
      <name>Cadastre</name>
      <Placemark>
        <name>Parcelle A</name>
        <Polygon>
          <outerBoundaryIs>
            <LinearRing>
              <coordinates>2.35,48.85,0 2.36,48.85,0 2.36,48.86,0</coordinates>
            </LinearRing>
          </outerBoundaryIs>
        </Polygon>
      </Placemark>
    </Folder>
  </Document>
</kml>'''

STYLED_KML = '''<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Style id="roofStyle">
      <PolyStyle><color>7f0000ff</color></PolyStyle>
    </Style>
    <Style id="lineStyle">
      <LineStyle><color>ff00ff00</color><width>2</width></LineStyle>
    </Style>
    <StyleMap id="roofMap">
      <Pair><key>normal</key><styleUrl>#roofStyle</styleUrl></Pair>
      <Pair><key>highlight</key><styleUrl>#lineStyle</styleUrl></Pair>
    </StyleMap>
    <Folder>
      <name>Toits</name>
      <Placemark>
        <name>Toit nord</name>
        <styleUrl>#roofMap</styleUrl>
        <Polygon><outerBoundaryIs><LinearRing>
          <coordinates>2.35,48.85,0 2.351,48.85,0 2.351,48.851,0 2.35,48.851,0 2.35,48.85,0</coordinates>
        </LinearRing></outerBoundaryIs></Polygon>
      </Placemark>
    </Folder>
    <Folder>
      <Placemark>
        <name>Clôture</name>
        <LineString><coordinates>2.35,48.85 2.352,48.85</coordinates></LineString>
      </Placemark>
    </Folder>
    <Folder>
      <name>Routes</name>
      <Placemark>
        <styleUrl>#lineStyle</styleUrl>
        <LineString><coordinates>2.35,48.85 bad 2.36 2.36,abc 2.37,48.86,0 nan,48.0</coordinates></LineString>
      </Placemark>
      <Placemark>
        <name>Borne</name>
        <Point><coordinates>2.35,48.85,0</coordinates></Point>
      </Placemark>
      <Placemark>
        <name>Vide</name>
        <LineString><coordinates>foo bar,baz</coordinates></LineString>
      </Placemark>
    </Folder>
  </Document>
</kml>'''

TOP_LEVEL_KML = '''<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>Jardin</name>
      <Polygon><outerBoundaryIs><LinearRing>
        <coordinates>2.35,48.85 2.36,48.85 2.36,48.86 2.35,48.85</coordinates>
      </LinearRing></outerBoundaryIs></Polygon>
    </Placemark>
    <Placemark>
      <LineString><coordinates>2.35,48.85 2.36,48.86</coordinates></LineString>
    </Placemark>
  </Document>
</kml>'''

NESTED_FOLDERS_KML = '''<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Folder>
      <name>Batiment</name>
      <Placemark>
        <name>Facade</name>
        <LineString><coordinates>2.35,48.85 2.351,48.85</coordinates></LineString>
      </Placemark>
      <Folder>
        <name>Etage</name>
        <Placemark>
          <name>Dalle</name>
          <Polygon><outerBoundaryIs><LinearRing>
            <coordinates>2.35,48.85 2.351,48.85 2.351,48.851</coordinates>
          </LinearRing></outerBoundaryIs></Polygon>
        </Placemark>
      </Folder>
    </Folder>
  </Document>
</kml>'''

EMPTY_KML = '''<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document><name>Rien</name></Document>
</kml>'''

NO_GEOMETRY_KML = '''<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Folder>
      <name>Points</name>
      <Placemark><Point><coordinates>2.35,48.85</coordinates></Point></Placemark>
      <Placemark><LineString><coordinates>foo bar</coordinates></LineString></Placemark>
    </Folder>
  </Document>
</kml>'''

MALFORMED_KML = "<kml><Document><Placemark><name>oops</name></Document>"


# Triangle used by the end-to-end example (lat, lng)
ROOF_TRIANGLE = [
    GeoPoint(lat=48.85, lng=2.35),
    GeoPoint(lat=48.85, lng=2.36),
    GeoPoint(lat=48.86, lng=2.36),
]


@pytest.fixture
def triangle() -> list[GeoPoint]:
    return list(ROOF_TRIANGLE)


@pytest.fixture
def store() -> LayerStore:
    return LayerStore(Project())


@pytest.fixture
def workspace() -> Workspace:
    return Workspace(seed_default_layer=False)
