"""Per-channel pitch/volume/oscillator state and effect application.

A Voice sees a row's note in one of three ways:

- trigger_note(): a new sample and/or pitch from the note columns;
- start_effect(): the tick-0 half of the effect (latches, one-shot slides);
- update_effect(): the per-tick half, ticks 1..speed-1.

Periods stay inside [PERIOD_MIN, PERIOD_MAX] and volumes inside [0, 64]
whatever the effect parameters; nothing here raises.
"""
import numpy as np
from .consts import AMIGA_CLOCK,PERIOD_MIN,PERIOD_MAX,SR,VOL_MAX,WAVES
from .effects import Fx

PORTA_FX=(Fx.PORTA,Fx.PORTA_VOLSLIDE)

def _clamp(v,lo,hi):return lo if v<lo else hi if v>hi else v

def period_freq(per,ft=0):
 """Amiga period + finetune (-8..7) -> Hz"""
 return AMIGA_CLOCK/(2.0*per)*2.0**(ft/96.0)

class Voice:
 __slots__=('song','rate','smp','per','freq','pf','pos','last_off',
            'vol','hw','vf','ptgt','pspd',
            'vpos','vdep','vspd','vwav','tpos','tdep','tspd','twav',
            'loop_row','loop_cnt','delay','retrig')

 def __init__(self,song,rate=SR):
  self.song=song;self.rate=rate
  self.smp=None                 # no instrument yet
  self.per=self.freq=self.pf=0.0
  self.pos=self.last_off=0.0
  self.vol=self.hw=0;self.vf=0.0
  self.ptgt=self.pspd=0
  self.vpos=self.vdep=self.vspd=self.vwav=0
  self.tpos=self.tdep=self.tspd=self.twav=0
  self.loop_row=self.loop_cnt=0
  self.delay=self.retrig=0

 # ── pitch / volume primitives ───────────────────────────────────────────────

 def set_hw_volume(self,v):
  self.hw=_clamp(int(v),0,VOL_MAX);self.vf=self.hw/64.0

 def set_volume(self,v):
  """Logical and hardware volume together."""
  self.set_hw_volume(v);self.vol=self.hw

 def set_period(self,per):
  self.per=float(_clamp(per,PERIOD_MIN,PERIOD_MAX))
  self.freq=period_freq(self.per,self.smp.ft if self.smp else 0)

 def set_hw_freq(self,freq):
  self.pf=freq/self.rate

 def _repitch(self,per):
  self.set_period(per);self.set_hw_freq(self.freq)

 # ── row entry points ────────────────────────────────────────────────────────

 def latch_row(self,note):
  """Delay/retrigger ticks for the row about to play. Called at every row start."""
  k=note.fx.kind
  self.delay=note.fx.x if k==Fx.NOTE_DELAY else 0
  self.retrig=note.fx.x if k==Fx.RETRIGGER else 0

 def trigger_note(self,note):
  if note.snum>0:
   s=self.song.sample(note.snum)
   if s is not None:
    self.smp=s;self.set_volume(s.vol);self.pos=0.0
  if note.per>0:
   if self.vwav<4:self.vpos=0
   if self.twav<4:self.tpos=0
   if note.fx.kind not in PORTA_FX:self._repitch(note.per)

 def retrigger(self,note):
  self.trigger_note(note);self.pos=0.0

 def start_effect(self,note):
  fx=note.fx;k=fx.kind
  if k in PORTA_FX:
   if k==Fx.PORTA and fx.param:self.pspd=fx.param
   if note.per>0:self.ptgt=_clamp(note.per,PERIOD_MIN,PERIOD_MAX)
  elif k==Fx.VIBRATO:
   if fx.x:self.vspd=fx.x
   if fx.y:self.vdep=fx.y
  elif k==Fx.TREMOLO:
   if fx.x:self.tspd=fx.x
   if fx.y:self.tdep=fx.y
  elif k==Fx.SAMPLE_OFFSET:
   if fx.param:self.pos=self.last_off=float(fx.param<<8)
   else:self.pos=self.last_off
  elif k==Fx.SET_VOLUME:self.set_volume(fx.param)
  elif k==Fx.FINE_SLIDE_UP:
   if self.per:self._repitch(self.per-fx.x)
  elif k==Fx.FINE_SLIDE_DOWN:
   if self.per:self._repitch(self.per+fx.x)
  elif k==Fx.VIBRATO_WAVE:self.vwav=fx.x
  elif k==Fx.TREMOLO_WAVE:self.twav=fx.x
  elif k==Fx.FINETUNE:
   if self.smp is not None:self.smp.ft=fx.x-16 if fx.x>7 else fx.x
  elif k==Fx.FINE_VOL_UP:self.set_volume(self.hw+fx.x)
  elif k==Fx.FINE_VOL_DOWN:self.set_volume(self.hw-fx.x)
  elif k==Fx.NOTE_CUT:
   if fx.x==0:self.set_volume(0)
  elif k==Fx.NOTE_DELAY:self.delay=fx.x
  elif k==Fx.RETRIGGER:self.retrig=fx.x

 def update_effect(self,tick,note):
  fx=note.fx;k=fx.kind
  if k==Fx.ARPEGGIO:
   ph=(tick-1)%3
   semi=(0,fx.x,fx.y)[ph]
   self.set_hw_freq(self.freq*2.0**(semi/12.0))
  elif k==Fx.SLIDE_UP:
   if self.per:self._repitch(self.per-fx.param)
  elif k==Fx.SLIDE_DOWN:
   if self.per:self._repitch(self.per+fx.param)
  elif k==Fx.PORTA:self._porta()
  elif k==Fx.VIBRATO:self._vibrato()
  elif k==Fx.PORTA_VOLSLIDE:self._porta();self._volslide(fx)
  elif k==Fx.VIBRATO_VOLSLIDE:self._vibrato();self._volslide(fx)
  elif k==Fx.TREMOLO:self._tremolo()
  elif k==Fx.VOLSLIDE:self._volslide(fx)
  elif k==Fx.NOTE_CUT:
   if tick==fx.x:self.set_volume(0)

 # ── effect helpers ──────────────────────────────────────────────────────────

 def _porta(self):
  if not self.ptgt or not self.per:return
  if self.per<self.ptgt:self._repitch(min(self.per+self.pspd,self.ptgt))
  elif self.per>self.ptgt:self._repitch(max(self.per-self.pspd,self.ptgt))

 def _vibrato(self):
  self.vpos=(self.vpos+self.vspd)&63
  n=int(self.vdep*2.0*WAVES[self.vwav&3][self.vpos])
  self.set_hw_freq(self.freq*2.0**(n/192.0))

 def _tremolo(self):
  self.tpos=(self.tpos+self.tspd)&63
  n=int(self.tdep*4.0*WAVES[self.twav&3][self.tpos])
  self.set_hw_volume(self.vol+n)

 def _volslide(self,fx):
  # both nibbles set cancel out
  up,down=fx.x,fx.y
  d=0 if up and down else up if up else -down
  self.set_volume(self.hw+d)

 # ── sample output ───────────────────────────────────────────────────────────

 def render(self,n):
  """Next n output samples (volume applied, truncated) as an int32 array."""
  out=np.zeros(n,dtype=np.int32)
  s=self.smp
  if s is None or n<=0:return out
  ip=(self.pos+np.arange(n,dtype=np.float64)*self.pf).astype(np.int64)
  self.pos+=n*self.pf
  d=s.data;dl=len(d)
  if not dl:return out
  if s.loop:ip=np.where(ip>s.le,s.ls+(ip-s.le-1)%s.ll,ip)
  ok=ip<dl
  raw=np.where(ok,d[np.minimum(ip,dl-1)],0).astype(np.float64)
  return (raw*self.vf).astype(np.int32)

 def next_sample(self):
  return int(self.render(1)[0])
