"""
Manual check against the real yt-dlp, ffmpeg and Groq API.

Needs GROQ_API_KEY and network access; not collected by pytest.
"""
from pathlib import Path
import tempfile

from loguru import logger

from ytscribe.pipeline import run_pipeline

url = "https://www.youtube.com/watch?v=9FuNtfsnRNo"

with tempfile.TemporaryDirectory() as tmp:
    out_file = Path(tmp) / "transcript.txt"
    logger.info(f"Transcribing {url} into {out_file}")

    result = run_pipeline(url, out_file, workdir=tmp)

    print("Transcript text preview:")
    print(result.transcript[:500])
    print("Leftover files:", sorted(p.name for p in Path(tmp).iterdir()))
