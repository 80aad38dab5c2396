"""
Pipeline for building climate normals per city.

For each requested city:
  1. Geocode the name (Open-Meteo geocoding)
  2. Fetch the 1991-2020 daily mean temperature series (ERA5 archive)
  3. Build the 365-day and 366-day normal profiles
  4. Save them to the normals store, keyed by the city's stable key

Legacy sources that only publish twelve monthly means can be imported with
the `build-monthly` command.
"""
import logging
import time
from pathlib import Path
from typing import List, Optional
from tqdm import tqdm

from climate_pipelines.config import NORMALS_DIR, REQUEST_DELAY_SECONDS
from climate_pipelines.errors import CityNotFoundError, NormalsUnavailableError, WeatherFetchError
from climate_pipelines.services.normals_builder import NormalsBuilder
from climate_pipelines.services.normals_projector import NormalsProjector
from climate_pipelines.services.normals_store import NormalsStore
from climate_pipelines.services.open_meteo_service import OpenMeteoService
from climate_pipelines.utils.file_utils import load_monthly_means

logger = logging.getLogger(__name__)


class NormalsPipeline:
    """Orchestrates fetching, building and storing climate normals."""

    def __init__(
        self,
        skip_existing: bool = True,
        normals_dir: Path = NORMALS_DIR,
        data_service: OpenMeteoService = None,
        request_delay: float = REQUEST_DELAY_SECONDS,
    ):
        """
        Initialize the pipeline.

        Args:
            skip_existing: Skip cities whose normals are already stored
            normals_dir: Directory of the normals store
            data_service: Open-Meteo client (created if omitted)
            request_delay: Seconds to wait between archive requests
        """
        self.data_service = data_service or OpenMeteoService()
        self.builder = NormalsBuilder()
        self.projector = NormalsProjector()
        self.store = NormalsStore(normals_dir)
        self.skip_existing = skip_existing
        self.request_delay = request_delay

    def build_city(self, name: str) -> str:
        """
        Build and store normals for one city.

        Returns:
            "built", "skipped", "not_found" or "unavailable"
        """
        try:
            location = self.data_service.search_city(name)
        except CityNotFoundError:
            logger.warning("City not found: %s", name)
            return "not_found"

        if self.skip_existing and self.store.exists(location.cache_key):
            logger.info("Normals for %s already stored, skipping", location.label)
            return "skipped"

        try:
            dates, temps = self.data_service.fetch_normals_series(location.latitude, location.longitude)
        except (NormalsUnavailableError, WeatherFetchError) as e:
            logger.warning("Normals unavailable for %s: %s", location.label, e)
            return "unavailable"

        normals = self.builder.build_normals(dates, temps)
        if normals is None:
            return "unavailable"

        path = self.store.save(location.cache_key, normals)
        logger.info("Saved normals for %s to %s", location.label, path)
        return "built"

    def run(self, cities: List[str]) -> dict:
        """
        Build normals for a list of cities.

        Returns:
            Dict with a count per outcome
        """
        stats = {"built": 0, "skipped": 0, "not_found": 0, "unavailable": 0}
        for i, name in enumerate(tqdm(cities, desc="Cities")):
            if i > 0 and self.request_delay:
                time.sleep(self.request_delay)
            stats[self.build_city(name)] += 1

        print(f"\nNormals pipeline complete!")
        print(f"  Built: {stats['built']}")
        print(f"  Skipped (already stored): {stats['skipped']}")
        print(f"  Not found: {stats['not_found']}")
        print(f"  Unavailable: {stats['unavailable']}")
        return stats

    def build_monthly(self, key: str, csv_path: Path) -> bool:
        """Store normals synthesized from a monthly means CSV."""
        normals = self.builder.build_from_monthly(load_monthly_means(csv_path))
        if normals is None:
            print(f"Could not build normals from {csv_path}: twelve monthly means required")
            return False
        path = self.store.save(key, normals)
        print(f"Saved monthly normals for {key} to {path}")
        return True

    def project(self, key: str, iso_date: str) -> Optional[float]:
        """Look up the stored normal for a date."""
        normals = self.store.load(key)
        if normals is None:
            print(f"No normals stored for {key}")
            return None
        value = self.projector.project_normal(iso_date, normals)
        if value is None:
            print(f"{iso_date}: n/a")
        else:
            print(f"{iso_date}: {value:.1f} °C ({normals.source} normals)")
        return value


def main():
    """Run the normals pipeline."""
    import argparse
    from climate_pipelines import logging_config as _  # configure logging

    parser = argparse.ArgumentParser(description="Build and query climate normals")
    parser.add_argument(
        "--normals-dir",
        type=Path,
        default=NORMALS_DIR,
        help="Directory for stored normals",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Fetch and build normals for cities")
    build_parser.add_argument(
        "--city",
        action="append",
        required=True,
        help="City name (repeatable)",
    )
    build_parser.add_argument(
        "--force",
        action="store_true",
        help="Rebuild normals even if they are already stored",
    )

    monthly_parser = subparsers.add_parser("build-monthly", help="Import twelve monthly means")
    monthly_parser.add_argument("--key", required=True, help="Location key to store under")
    monthly_parser.add_argument("--csv", type=Path, required=True, help="CSV with month,mean columns")

    project_parser = subparsers.add_parser("project", help="Print the normal for a date")
    project_parser.add_argument("--key", required=True, help="Location key")
    project_parser.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")

    args = parser.parse_args()

    pipeline = NormalsPipeline(
        skip_existing=not getattr(args, "force", False),
        normals_dir=args.normals_dir,
    )

    if args.command == "build":
        pipeline.run(args.city)
    elif args.command == "build-monthly":
        pipeline.build_monthly(args.key, args.csv)
    elif args.command == "project":
        pipeline.project(args.key, args.date)


if __name__ == "__main__":
    main()
