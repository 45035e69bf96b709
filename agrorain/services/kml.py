# agrorain/services/kml.py
from __future__ import annotations
import math
import xml.etree.ElementTree as ET
from datetime import date
from typing import Any, Optional, Sequence

from ..schemas import GaugeSummary

KML_NS = "http://www.opengis.net/kml/2.2"
KML_MIME_TYPE = "application/vnd.google-earth.kml+xml"

DOCUMENT_NAME = "AgroRain - Mapa de Chuva"
DOCUMENT_DESCRIPTION = "Dados de pluviometria gerados em AgroRain"


def _number(value: Any) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    return f if math.isfinite(f) else 0.0


def _plain(value: float) -> str:
    # 3.0 -> "3", -23.12345 -> "-23.12345"
    return str(int(value)) if value.is_integer() else repr(value)


def placemark_name(summary: GaugeSummary) -> str:
    return f"{summary.name}: {_number(summary.total):.1f}mm"


def placemark_description(summary: GaugeSummary) -> str:
    last_date = summary.last_date.isoformat() if summary.last_date else "-"
    return (
        f"Total safra: {_number(summary.total):.1f}mm. "
        f"Última chuva: {_plain(_number(summary.last_amount))}mm em {last_date}"
    )


def build_kml(summaries: Sequence[GaugeSummary]) -> str:
    """KML 2.2 document with one Placemark per gauge summary."""
    root = ET.Element("kml", xmlns=KML_NS)
    doc = ET.SubElement(root, "Document")
    ET.SubElement(doc, "name").text = DOCUMENT_NAME
    ET.SubElement(doc, "description").text = DOCUMENT_DESCRIPTION

    for s in summaries:
        pm = ET.SubElement(doc, "Placemark")
        ET.SubElement(pm, "name").text = placemark_name(s)
        ET.SubElement(pm, "description").text = placemark_description(s)
        point = ET.SubElement(pm, "Point")
        # KML wants lon,lat,alt
        ET.SubElement(point, "coordinates").text = (
            f"{_plain(_number(s.longitude))},{_plain(_number(s.latitude))},0"
        )

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def kml_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"agrorain_mapa_{today.isoformat()}.kml"
