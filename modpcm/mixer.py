import logging
import numpy as np
from .consts import SR
from .sequencer import Sequencer

log=logging.getLogger(__name__)

def mix_tick(voices,n):
 """Mix n output samples from every voice -> int8 array.
 Each voice is halved (truncating toward zero) for headroom, then the sum is clipped."""
 acc=np.zeros(n,dtype=np.int32)
 for v in voices:
  s=v.render(n)
  acc+=np.trunc(s/2).astype(np.int32)
 return np.clip(acc,-128,127).astype(np.int8)

def render(song,rate=SR,start=0,cancel=None):
 """Render the whole playthrough of song to signed 8-bit mono PCM (np.int8).

 start is the order index to begin at; cancel, if given, is polled between
 rows and stops the render early when it returns true.
 """
 seq=Sequencer(song,rate,start)
 chunks=[mix_tick(seq.voices,n) for n in seq.ticks(cancel)]
 pcm=np.concatenate(chunks) if chunks else np.zeros(0,dtype=np.int8)
 log.debug("rendered %d samples (%.2fs) from %r",len(pcm),len(pcm)/rate,song)
 return pcm
