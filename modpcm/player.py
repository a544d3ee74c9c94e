"""PCM sinks: audio device (sounddevice) or raw file."""
from pathlib import Path
from .consts import SR

def play(pcm,rate=SR):
 """Play a signed 8-bit mono buffer and block until it has finished."""
 import sounddevice as sd
 if not len(pcm):return
 with sd.OutputStream(samplerate=rate,channels=1,dtype='int8') as st:
  st.write(pcm.reshape(-1,1))

def write_raw(pcm,path):
 Path(path).write_bytes(pcm.tobytes())
 return len(pcm)
