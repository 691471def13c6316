# climbframe/exports.py
"""
EXPORT FORMATS: Parts List CSV and Model JSON
=============================================

One definition of each interchange format, shared by the Streamlit
export page and the REST API.

    part,quantity
    pipe_20cm,24
    ...
"""

import csv
import io
from typing import Any, Dict, Iterable, List, Tuple

from .graph import connection_nodes, parts_summary
from .lattice.grid import UNIT_M
from .model import Pipe

MODEL_FORMAT_VERSION = '1.0'


def bom_rows(structure: Iterable[Pipe]) -> List[Tuple[str, int]]:
    """(part, quantity) rows: pipes by length, then connectors by type."""
    summary = parts_summary(structure)
    return [
        ('pipe_20cm', summary.pipe_20cm),
        ('pipe_40cm', summary.pipe_40cm),
        ('connector_2way', summary.connectors_2),
        ('connector_3way', summary.connectors_3),
        ('connector_4way', summary.connectors_4),
    ]


def bom_csv(structure: Iterable[Pipe]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['part', 'quantity'])
    writer.writerows(bom_rows(structure))
    return output.getvalue()


def pipe_dict(pipe: Pipe) -> Dict[str, Any]:
    return {
        'id': pipe.id,
        'start': list(pipe.start),
        'axis': pipe.axis,
        'length_units': pipe.length_units,
    }


def model_dict(structure: Iterable[Pipe]) -> Dict[str, Any]:
    """
    Full model for interchange: parts counts plus pipe and node geometry.

    Coordinates are grid units; `unit_m` gives metres per unit.
    """
    pipes = list(structure)
    return {
        'version': MODEL_FORMAT_VERSION,
        'type': 'climbframe',
        'unit_m': UNIT_M,
        'parts': parts_summary(pipes).to_dict(),
        'geometry': {
            'pipes': [pipe_dict(p) for p in pipes],
            'nodes': [
                {'point': list(n.point), 'degree': n.degree, 'connector': n.kind.value}
                for n in connection_nodes(pipes)
            ],
        },
    }
