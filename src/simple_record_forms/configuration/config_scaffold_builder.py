"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "record-forms.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration for simple-record-forms.
# Every value is optional. APPWRITE_* environment variables override this file.

store:
  # APPWRITE_ENDPOINT
  endpoint: "https://fra.cloud.appwrite.io/v1"
  # APPWRITE_PROJECT_ID
  project_id: "698223300022ead0aec7"
  # APPWRITE_DATABASE_ID
  database_id: "698226cc00165f415310"
  # APPWRITE_COLLECTION_ID
  collection_id: "events"
  # APPWRITE_API_KEY (leave unset for public collections)
  # api_key: "<OPTIONAL>"

schema:
  # Field order drives form prompts and list cards.
  # type: string | datetime | integer | float | boolean | email | url
  fields:
    - key: "EventName"
      label: "Event Name"
      type: "string"
      required: true
    - key: "location"
      label: "Location"
      type: "string"
      required: true
    - key: "time"
      label: "Time"
      type: "datetime"
      required: true
    - key: "host"
      label: "Host"
      type: "string"
      required: true
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template mirroring the built-in defaults."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
