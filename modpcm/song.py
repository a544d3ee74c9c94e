from collections import namedtuple
import numpy as np
from .consts import BPM,SPEED
from .effects import decode

class MalformedModule(ValueError):
 """Buffer too short for the declared layout, or a structural field out of range."""

# ── data types ────────────────────────────────────────────────────────────────
class Smp:
 __slots__=('name','len','ft','ft0','vol','ls','ll','le','loop','data')
 def __init__(self,name='',ln=0,ft=0,vol=64,ls=0,ll=0):
  self.name=name;self.len=ln
  self.ft=ft;self.ft0=ft          # ft is mutable (E5x), ft0 is the parsed value
  self.vol=vol;self.ls=ls;self.ll=ll
  self.le=ls+ll-1
  self.loop=ll>2
  self.data=np.zeros(0,dtype=np.int8)

 def __repr__(self):
  return f"Smp({self.name!r},len={self.len},ft={self.ft},vol={self.vol},loop={self.ls}+{self.ll})"

class Note(namedtuple('Note','snum per eff prm fx')):
 """One pattern cell. fx is the decoded Effect of (eff, prm)."""
 __slots__=()
 @classmethod
 def from_word(cls,w):
  snum=((w>>24)&0xF0)|((w>>12)&0xF)
  per=(w>>16)&0xFFF
  eff=(w>>8)&0xF;prm=w&0xFF
  return cls(snum,per,eff,prm,decode(eff,prm))

class Song:
 """Parsed module. Read-only once built; only Smp.ft changes, during a render."""
 def __init__(self,nc,smp,sl,orders,pats,title='',bpm=BPM,spd=SPEED):
  self.title=title;self.nc=nc
  self.smp=list(smp)            # 0-based; pattern sample numbers are 1-based
  self.sl=sl;self.orders=tuple(orders)
  self.pats=pats                # [pattern][row][channel] -> Note
  self.bpm=bpm;self.spd=spd

 def row(self,o,r):return self.pats[self.orders[o]][r]

 def sample(self,snum):
  """1-based sample number -> Smp, None when out of range."""
  return self.smp[snum-1] if 0<snum<=len(self.smp) else None

 def reset_finetunes(self):
  for s in self.smp:s.ft=s.ft0

 def __repr__(self):
  return f"Song({self.title!r},{self.nc}ch,{len(self.smp)}smp,{self.sl}ord,{len(self.pats)}pat)"
