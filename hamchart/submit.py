from __future__ import annotations

from pathlib import Path

import requests

from hamchart.form import ChartForm


class ChartSubmitError(Exception):
    """Raised when a chart request cannot be completed."""


def submit_chart(form: ChartForm, server_url: str, output_path, timeout: float = 60) -> Path:
    """
    Post the form to a chart server and save the returned PDF.

    Args:
        form: A form whose coordinates have passed validation
        server_url: Chart endpoint, e.g. http://127.0.0.1:8080/chart
        output_path: Where to write the PDF
        timeout: Seconds to wait for the server

    Returns:
        Path of the written PDF

    Raises:
        ChartSubmitError: If the form is incomplete or the request fails
    """
    if not form.is_submittable():
        raise ChartSubmitError("Latitude and longitude must both be valid before submitting.")

    try:
        response = requests.post(server_url, data=form.request_data(), timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ChartSubmitError(f"Chart request failed: {e}") from e

    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
    except OSError as e:
        raise ChartSubmitError(f"Could not save chart to {path}: {e}") from e
    return path
