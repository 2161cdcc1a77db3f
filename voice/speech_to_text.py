"""Speech-to-text using OpenAI Whisper."""

import asyncio
import logging
import wave
from pathlib import Path
from typing import Optional

import numpy as np
import whisper
from scipy import signal

import config
from practice.errors import TranscriptionError

logger = logging.getLogger(__name__)


def load_wav(path: Path, target_sample_rate: int = config.WHISPER_SAMPLE_RATE) -> np.ndarray:
    """
    Read a PCM WAV file as mono float32 samples at the target rate.

    Reading the file ourselves avoids Whisper's ffmpeg dependency.
    """
    with wave.open(str(path), 'rb') as wav_file:
        frames = wav_file.getnframes()
        sample_rate = wav_file.getframerate()
        channels = wav_file.getnchannels()
        sample_width = wav_file.getsampwidth()
        audio_bytes = wav_file.readframes(frames)

    if sample_width == 1:
        audio = np.frombuffer(audio_bytes, dtype=np.uint8).astype(np.float32) / 128.0 - 1.0
    elif sample_width == 2:
        audio = np.frombuffer(audio_bytes, dtype=np.int16).astype(np.float32) / 32768.0
    elif sample_width == 4:
        audio = np.frombuffer(audio_bytes, dtype=np.int32).astype(np.float32) / 2147483648.0
    else:
        raise TranscriptionError(f"Unsupported sample width: {sample_width}")

    # Mix down to mono
    if channels > 1:
        audio = audio.reshape(-1, channels).mean(axis=1)

    if audio.size and np.abs(audio).max() < 0.01:
        logger.warning("Audio in %s is very quiet or silent", path)

    if sample_rate != target_sample_rate:
        num_samples = int(len(audio) * target_sample_rate / sample_rate)
        audio = signal.resample(audio, num_samples)
        logger.debug("Resampled %s from %dHz to %dHz", path, sample_rate, target_sample_rate)

    return audio.astype(np.float32)


class WhisperSTT:
    """Whisper speech-to-text handler."""

    def __init__(self, model_name: str = config.WHISPER_MODEL, language: Optional[str] = config.WHISPER_LANGUAGE):
        """Initialize Whisper model."""
        self.model_name = model_name
        self.language = language
        self.model = None
        self._load_model()

    def _load_model(self):
        """Load Whisper model (synchronous, called at startup)."""
        logger.info("Loading Whisper model: %s...", self.model_name)
        self.model = whisper.load_model(self.model_name)
        logger.info("Whisper model loaded")

    def transcribe_sync(self, audio_file_path: str) -> str:
        """Transcribe a WAV file, blocking the caller."""
        if not self.model:
            raise TranscriptionError("Whisper model not loaded")

        audio_path = Path(audio_file_path).resolve()
        if not audio_path.is_file():
            raise TranscriptionError(f"Audio file not found: {audio_path}")
        if audio_path.stat().st_size == 0:
            raise TranscriptionError(f"Audio file is empty: {audio_path}")

        try:
            audio = load_wav(audio_path)
        except (wave.Error, EOFError) as e:
            raise TranscriptionError(f"Cannot read {audio_path}: {e}") from e

        logger.debug("Transcribing %s (%d samples)", audio_path, len(audio))
        try:
            result = self.model.transcribe(audio, language=self.language)
        except Exception as e:
            raise TranscriptionError(f"Whisper failed on {audio_path}: {e}") from e
        return result.get("text", "").strip()

    async def transcribe(self, audio_file_path: str) -> str:
        """
        Transcribe audio file to text asynchronously.

        Args:
            audio_file_path: Path to a WAV file

        Returns:
            Transcribed text (may be empty if nothing was recognised)
        """
        # Run transcription in executor to avoid blocking
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, self.transcribe_sync, audio_file_path)
        logger.info("Transcription result: %s", text[:50] + "..." if len(text) > 50 else text)
        return text
