"""
Input Manager (JSON)
Reads a scheduler solution that was already dumped to a .json file.
"""
import json
import logging
import os

from scheduleplotter.model.errors import InvalidSchedule
from scheduleplotter.model.schedule import ScheduleView

logger = logging.getLogger(__name__)


def load_schedule(filepath: str) -> ScheduleView:
    """
    Load a solution dictionary from disk and turn it into a ScheduleView.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidSchedule: If the file is not JSON or describes an invalid schedule.
    """
    logger.info(f"Loading schedule from: {filepath}")
    if not os.path.exists(filepath):
        msg = f"File '{filepath}' does not exist."
        logger.error(msg)
        raise FileNotFoundError(msg)

    with open(filepath, "r", encoding="utf-8") as f:
        try:
            solution = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"File '{filepath}' is not valid JSON: {e}")
            raise InvalidSchedule(f"File '{filepath}' is not valid JSON.") from e

    if not isinstance(solution, dict):
        raise InvalidSchedule(f"File '{filepath}' does not contain a solution object.")

    view = ScheduleView.from_solution(solution)
    logger.info(f"Loaded {len(view.tasks)} tasks on {len(view.processors)} processors.")
    return view
