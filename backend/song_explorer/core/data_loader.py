import pandas as pd
from pathlib import Path
import logging
from typing import List, Optional

from pydantic import ValidationError

from .config import settings
from .exceptions import DatasetError
from song_explorer.models.song import Song

logger = logging.getLogger(__name__)

STRING_COLUMNS = ['title', 'artist', 'genre', 'mood', 'language', 'lyrics']
NUMERIC_COLUMNS = {
    'tempo': 0.0,
    'energy': 0.0,
    'acousticness': 0.0,
    'danceability': 0.0,
}
REQUIRED_COLUMNS = ['id'] + STRING_COLUMNS + list(NUMERIC_COLUMNS)


class DataLoader:
    def __init__(self, dataset_path: Optional[Path] = None):
        self.dataset_path = Path(dataset_path) if dataset_path is not None else settings.DATASET_PATH

    def process_dataset(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the raw dataset and keep one row per song id"""
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DatasetError(f"Dataset is missing required columns: {missing}")

        # Drop any completely empty rows
        df = df.dropna(how='all')

        df['id'] = pd.to_numeric(df['id'], errors='coerce')
        invalid_ids = df['id'].isna().sum()
        if invalid_ids:
            logger.warning(f"Dropping {invalid_ids} rows without a numeric id")
            df = df.dropna(subset=['id'])
        df['id'] = df['id'].astype(int)

        for col in STRING_COLUMNS:
            df[col] = df[col].fillna('').astype(str).str.strip()

        for col, default in NUMERIC_COLUMNS.items():
            df[col] = pd.to_numeric(df[col], errors='coerce').fillna(default).astype(float)

        duplicated = df['id'].duplicated(keep='first')
        if duplicated.any():
            logger.warning(f"Dropping {int(duplicated.sum())} rows with duplicate ids: {sorted(df.loc[duplicated, 'id'].unique().tolist())}")
            df = df[~duplicated]

        return df[REQUIRED_COLUMNS]

    def load_songs(self) -> List[Song]:
        """Read, clean and validate the song dataset"""
        if not self.dataset_path.exists():
            raise DatasetError(f"Dataset not found at {self.dataset_path}")

        logger.info(f"Reading dataset from {self.dataset_path}")
        try:
            df = pd.read_csv(self.dataset_path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DatasetError(f"Could not parse dataset {self.dataset_path}: {e}") from e

        initial_count = len(df)
        df = self.process_dataset(df)

        songs = []
        for row in df.to_dict('records'):
            try:
                songs.append(Song(
                    id=int(row['id']),
                    title=row['title'],
                    artist=row['artist'],
                    genre=row['genre'],
                    mood=row['mood'],
                    language=row['language'],
                    tempo=float(row['tempo']),
                    energy=float(row['energy']),
                    acousticness=float(row['acousticness']),
                    danceability=float(row['danceability']),
                    lyrics=row['lyrics'],
                ))
            except ValidationError as e:
                raise DatasetError(f"Invalid song row with id {row['id']}: {e}") from e

        logger.info(f"Loaded {len(songs)} songs ({initial_count} rows in source)")
        return songs
