"""
ytscribe: video URL -> yt-dlp -> ffmpeg -> Groq Whisper -> transcript.
"""

__version__ = "0.1.0"
