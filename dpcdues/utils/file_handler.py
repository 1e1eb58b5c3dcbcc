"""
File handling utilities: roster import, report export, config loading.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Union, Optional, Tuple
import logging
from datetime import date, datetime

import pandas as pd

from ..pricing.billing import billing_frame
from ..pricing.models import Household, HouseholdBilling, Member
from .currency import format_cents


ROSTER_COLUMNS = [
    'member_id', 'first_name', 'last_name', 'email', 'date_of_birth',
    'household_id', 'household_name', 'status',
]


class FileHandler:
    """Handle file operations for input and output."""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize file handler.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self.output_dir = Path(self.config.get('output_dir', 'output'))
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def load_config(file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a JSON configuration file.

        A missing file yields an empty configuration.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            return {}
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def load_roster(self, file_path: Union[str, Path]) -> Tuple[List[Member], List[Household]]:
        """
        Load members and households from a roster CSV.

        Args:
            file_path: CSV with the columns in ``ROSTER_COLUMNS``;
                ``date_of_birth`` is required, the rest optional

        Returns:
            Tuple of (members, households)
        """
        file_path = Path(file_path)
        if not file_path.exists():
            error_msg = f"Roster file not found: {file_path}"
            self.logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return self.roster_from_frame(df)

    def roster_from_frame(self, df: pd.DataFrame) -> Tuple[List[Member], List[Household]]:
        """Build members and households from a roster DataFrame."""
        if 'date_of_birth' not in df.columns:
            raise ValueError("Roster is missing the 'date_of_birth' column")

        df = df.fillna('')
        members: List[Member] = []
        households: Dict[int, Household] = {}

        for _, row in df.iterrows():
            household_id = self._optional_int(row.get('household_id', ''))
            if household_id is not None and household_id not in households:
                name = str(row.get('household_name', '')).strip() or f"Household {household_id}"
                households[household_id] = Household(household_id=household_id, name=name)

            members.append(Member(
                date_of_birth=str(row['date_of_birth']).strip(),
                household_id=household_id,
                member_id=self._optional_int(row.get('member_id', '')),
                first_name=str(row.get('first_name', '')).strip(),
                last_name=str(row.get('last_name', '')).strip(),
                email=str(row.get('email', '')).strip() or None,
                status=str(row.get('status', '')).strip() or 'active',
            ))

        self.logger.info(f"Loaded {len(members)} members in {len(households)} households")
        return members, list(households.values())

    def save_billing_report(self, rows: List[HouseholdBilling],
                            output_file: Optional[str] = None) -> Path:
        """
        Save household billing rows to a CSV file.

        Args:
            rows: Billing rows
            output_file: Output file name

        Returns:
            Path to saved file
        """
        if output_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_file = f"billing_report_{timestamp}.csv"

        output_path = self.output_dir / output_file

        df = billing_frame(rows)
        for column in ('raw_total_cents', 'total_cents', 'savings_cents'):
            df[column.replace('_cents', '')] = df[column].map(format_cents)
        df.to_csv(output_path, index=False)

        self.logger.info(f"Saved billing report to: {output_path}")
        return output_path

    def save_results(self, results: Any, output_file: Optional[str] = None) -> Path:
        """
        Save results to a JSON file.

        Args:
            results: Objects with ``to_dict``, dicts, lists or scalars
            output_file: Output file name (if None, generates timestamp-based name)

        Returns:
            Path to saved file
        """
        if not isinstance(results, list):
            results = [results]

        if output_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_file = f"dues_results_{timestamp}.json"

        output_path = self.output_dir / output_file

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self._make_serializable(results), f, indent=2, ensure_ascii=False)

        self.logger.info(f"Saved results to: {output_path}")
        return output_path

    def _make_serializable(self, obj: Any) -> Any:
        """
        Convert objects to JSON-serializable format.

        Args:
            obj: Object to convert

        Returns:
            JSON-serializable object
        """
        if isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, dict):
            return {str(key): self._make_serializable(value) for key, value in obj.items()}
        elif hasattr(obj, 'to_dict'):
            return self._make_serializable(obj.to_dict())
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        return obj

    def load_results(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Load previously saved results.

        Args:
            file_path: Path to results file

        Returns:
            List of loaded results
        """
        file_path = Path(file_path)

        if not file_path.exists():
            error_msg = f"Results file not found: {file_path}"
            self.logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        with open(file_path, 'r', encoding='utf-8') as f:
            results = json.load(f)

        self.logger.info(f"Loaded results from: {file_path}")
        return results

    def create_sample_roster(self, output_dir: Optional[Path] = None) -> Path:
        """
        Create a sample roster CSV.

        Args:
            output_dir: Directory to create the file in

        Returns:
            Path to the roster file
        """
        output_dir = Path(output_dir or "sample_data")
        output_dir.mkdir(parents=True, exist_ok=True)

        rows = [
            (1, 'Sarah', 'Johnson', 'sarah.johnson@example.com', '1985-03-15', 1, 'The Johnson Family', 'active'),
            (2, 'Michael', 'Johnson', 'michael.johnson@example.com', '1976-07-22', 1, 'The Johnson Family', 'active'),
            (3, 'Emma', 'Johnson', 'emma.johnson@example.com', '2016-01-10', 1, 'The Johnson Family', 'active'),
            (4, 'Robert', 'Johnson', 'robert.johnson@example.com', '1955-11-02', 1, 'The Johnson Family', 'active'),
            (5, 'David', 'Chen', 'david.chen@example.com', '1998-05-30', 2, 'The Chen Household', 'active'),
            (6, 'Lisa', 'Chen', 'lisa.chen@example.com', '1999-09-14', 2, 'The Chen Household', 'active'),
            (7, 'Margaret', 'Wilson', 'margaret.wilson@example.com', '1954-04-08', '', '', 'active'),
            (8, 'James', 'Brown', 'james.brown@example.com', '1992-12-01', '', '', 'inactive'),
        ]
        sample_file = output_dir / "sample_roster.csv"
        pd.DataFrame(rows, columns=ROSTER_COLUMNS).to_csv(sample_file, index=False)

        self.logger.info(f"Created sample roster in: {output_dir}")
        return sample_file

    @staticmethod
    def _optional_int(value: Any) -> Optional[int]:
        text = str(value).strip()
        if not text:
            return None
        return int(float(text))
