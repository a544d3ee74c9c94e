"""Amiga tracker module (4/31-channel family) -> Song."""
import logging,struct
from pathlib import Path
import numpy as np
from .consts import ORDERS,ROWS,SMP_NAME,TAG_OFF,TITLE_LEN,MOD_TAGS
from .song import MalformedModule,Note,Smp,Song

log=logging.getLogger(__name__)

def _text(b):return b.split(b'\x00')[0].decode('latin-1',errors='replace').rstrip()

class _Reader:
 """Forward-only cursor over the module bytes."""
 def __init__(self,data):self.data=data;self.off=0
 def take(self,n,what):
  end=self.off+n
  if end>len(self.data):
   raise MalformedModule(f"{what}: need {n} bytes at offset {self.off}, file is {len(self.data)} bytes")
  b=self.data[self.off:end];self.off=end
  return b
 def unpack(self,fmt,what):
  return struct.unpack(fmt,self.take(struct.calcsize(fmt),what))

def parse(data,channels=4,instruments=31):
 """Build a Song from module bytes. channels/instruments are not stored in
 the file for this format family and must come from the caller."""
 if channels<1:raise MalformedModule(f"channel count {channels} out of range")
 if instruments<1:raise MalformedModule(f"instrument count {instruments} out of range")
 rd=_Reader(bytes(data))
 title=_text(rd.take(TITLE_LEN,'title'))
 smp=[]
 for i in range(instruments):
  what=f"sample {i+1} header"
  name=_text(rd.take(SMP_NAME,what))
  ln,ft,vol,ls,ll=rd.unpack('>HBBHH',what)
  ft&=0xF;ft=ft-16 if ft>7 else ft
  smp.append(Smp(name,ln*2,ft,min(64,vol),ls*2,ll*2))
 sl,_=rd.unpack('>BB','song length')
 sl=min(sl,ORDERS)
 orders=list(rd.take(ORDERS,'order table'))
 npats=max(orders)+1
 rd.take(4,'signature')            # not validated
 words=struct.Struct(f'>{channels}I')
 pats=[]
 for p in range(npats):
  pat=[]
  for r in range(ROWS):
   row=words.unpack(rd.take(words.size,f"pattern {p} row {r}"))
   pat.append(tuple(Note.from_word(w) for w in row))
  pats.append(tuple(pat))
 for i,s in enumerate(smp):
  if s.len:s.data=np.frombuffer(rd.take(s.len,f"sample {i+1} data"),dtype=np.int8).copy()
 log.debug("parsed %r: %d bytes used of %d",title,rd.off,len(rd.data))
 return Song(channels,smp,sl,orders,tuple(pats),title=title)

def sniff_layout(data):
 """Guess (channels, instruments) from the tag at offset 1080. Defaults to 4/31."""
 tag=bytes(data[TAG_OFF:TAG_OFF+4])
 if tag in MOD_TAGS:return MOD_TAGS[tag],31
 if len(tag)==4 and tag[:2].isdigit() and tag[2:]==b'CH':return int(tag[:2]),31
 return 4,31

def load(path,channels=None,instruments=None):
 data=Path(path).read_bytes()
 if channels is None or instruments is None:
  nc,ns=sniff_layout(data)
  channels=nc if channels is None else channels
  instruments=ns if instruments is None else instruments
 return parse(data,channels,instruments)
