from __future__ import annotations

import json
from typing import List, Sequence
from xml.etree import ElementTree

from django.http import HttpResponse

from ..models import Draw

JSON = 'json'
XML = 'xml'
PLAINTEXT = 'plaintext'


def serialize_draw(draw: Draw) -> dict:
    return {
        'date': draw.date.isoformat(),
        'numbers': draw.main_numbers,
        'stars': draw.star_numbers,
    }


def render_json(draws: Sequence[Draw]) -> str:
    payload = [serialize_draw(draw) for draw in draws]
    return json.dumps(payload[0] if len(payload) == 1 else payload)


def _draw_element(draw: Draw) -> ElementTree.Element:
    element = ElementTree.Element('result')
    ElementTree.SubElement(element, 'date').text = draw.date.isoformat()
    numbers = ElementTree.SubElement(element, 'numbers')
    for value in draw.main_numbers:
        ElementTree.SubElement(numbers, 'number').text = str(value)
    stars = ElementTree.SubElement(element, 'stars')
    for value in draw.star_numbers:
        ElementTree.SubElement(stars, 'star').text = str(value)
    return element


def render_xml(draws: Sequence[Draw]) -> str:
    if len(draws) == 1:
        root = _draw_element(draws[0])
    else:
        root = ElementTree.Element('results')
        root.extend(_draw_element(draw) for draw in draws)
    return ElementTree.tostring(root, encoding='unicode')


def render_plaintext(draws: Sequence[Draw]) -> str:
    lines: List[str] = []
    for draw in draws:
        numbers = ','.join(str(n) for n in draw.main_numbers)
        stars = ','.join(str(n) for n in draw.star_numbers)
        lines.append(f"Date: {draw.date.isoformat()}, Numbers: {numbers}, Stars: {stars}\n")
    return ''.join(lines)


RENDERERS = {
    JSON: (render_json, 'application/json'),
    XML: (render_xml, 'application/xml'),
    PLAINTEXT: (render_plaintext, 'text/plain'),
}


def render_draws(draws: Sequence[Draw], output_format: str | None) -> HttpResponse:
    """Render draws in the requested format, falling back to JSON."""
    renderer, content_type = RENDERERS.get((output_format or JSON).lower(), RENDERERS[JSON])
    return HttpResponse(renderer(list(draws)), content_type=content_type)
