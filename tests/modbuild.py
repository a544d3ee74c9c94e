"""Synthetic module bytes for tests."""
import struct
import numpy as np
from modpcm.effects import decode
from modpcm.song import Note,Smp,Song

def word(snum=0,per=0,eff=0,prm=0):
 return ((snum&0xF0)<<24)|(per<<16)|((snum&0xF)<<12)|(eff<<8)|prm

def build(samples=(),patterns=({},),orders=(0,),sl=None,channels=4,instruments=31,
          tag=b'M.K.',title=b'test song'):
 """samples: dicts with data/vol/ft/ls/ll (ls/ll in words, ft as stored nibble);
 patterns: dicts {(row, ch): (snum, per, eff, prm)}."""
 out=bytearray(title.ljust(20,b'\x00')[:20])
 datas=[]
 for i in range(instruments):
  s=samples[i] if i<len(samples) else {}
  d=bytes(np.asarray(s.get('data',()),dtype=np.int8).tobytes())
  if len(d)%2:d+=b'\x00'
  datas.append(d)
  out+=f'smp{i}'.encode().ljust(22,b'\x00')
  out+=struct.pack('>HBBHH',len(d)//2,s.get('ft',0),s.get('vol',64),s.get('ls',0),s.get('ll',0))
 orders=list(orders)
 out+=bytes([len(orders) if sl is None else sl,127])
 out+=bytes(orders+[0]*(128-len(orders)))
 out+=tag
 for pat in patterns:
  for r in range(64):
   for ch in range(channels):
    out+=struct.pack('>I',word(*pat.get((r,ch),(0,0,0,0))))
 for d in datas:out+=d
 return bytes(out)

def note(snum=0,per=0,eff=0,prm=0):
 return Note(snum,per,eff,prm,decode(eff,prm))

def sample(data,vol=64,ft=0,ls=0,ll=0):
 """Smp with loop start/length given in bytes."""
 s=Smp('',len(data),ft,vol,ls,ll)
 s.data=np.asarray(data,dtype=np.int8)
 return s

def song_of(*smps):
 return Song(1,smps,1,[0]*128,())
