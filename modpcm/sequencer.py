import logging
from .consts import ROWS,SR
from .effects import Fx,label
from .voice import Voice

log=logging.getLogger(__name__)

class SeqState:
 """All global sequencing state for one render."""
 __slots__=('rate','order','row','spd','bpm','tps','spt',
            'jump','brk','loop_to','pdelay','ended','visited')

 def __init__(self,song,rate=SR,start=0):
  if not 0<=start<=song.sl:
   raise ValueError(f"start order {start} outside 0..{song.sl}")
  self.rate=rate
  self.order=start;self.row=0
  self.spd=song.spd;self.bpm=self.tps=0;self.spt=0
  self.set_bpm(song.bpm)
  self.jump=self.brk=self.loop_to=-1   # -1 = nothing requested
  self.pdelay=0
  self.ended=False
  self.visited=set()

 def set_bpm(self,bpm):
  """BPM -> ticks per second and samples per tick."""
  self.bpm=bpm;self.tps=2*bpm/5.0
  self.spt=int(self.rate/self.tps)

class Sequencer:
 """Walks order table -> rows -> repeats -> ticks, driving one Voice per channel.

 ticks() yields the number of output samples to mix after each tick, once
 every voice has been advanced for it.
 """
 def __init__(self,song,rate=SR,start=0):
  self.song=song
  self.voices=[Voice(song,rate) for _ in range(song.nc)]
  self.st=SeqState(song,rate,start)

 def ticks(self,cancel=None):
  song=self.song;st=self.st
  song.reset_finetunes()
  while st.order<song.sl and not st.ended:
   if cancel is not None and cancel():
    log.debug("cancelled at order %d row %d",st.order,st.row);break
   yield from self._play_row()
   self._next_row()
  log.debug("stopped at order %d/%d",st.order,song.sl)

 # ── row ─────────────────────────────────────────────────────────────────────

 def _play_row(self):
  st=self.st
  cells=self.song.row(st.order,st.row)
  st.visited.add((st.order,st.row))
  rep=0
  while rep<=st.pdelay:
   for v,note in zip(self.voices,cells):v.latch_row(note)
   tick=0
   while tick<st.spd:
    for ch,(v,note) in enumerate(zip(self.voices,cells)):
     self._step(ch,v,note,tick,rep)
    yield st.spt
    tick+=1
   rep+=1
  st.pdelay=0

 def _step(self,ch,v,note,tick,rep):
  st=self.st
  if v.delay:
   # delayed note sounds once, on the last repeat of the row
   if tick==v.delay and rep>=st.pdelay:
    v.trigger_note(note);v.start_effect(note)
   elif tick:v.update_effect(tick,note)
  elif tick==0:
   if rep==0:
    v.trigger_note(note);v.start_effect(note)
    self._row_effect(ch,note)
  elif v.retrig and tick%v.retrig==0:
   v.retrigger(note);v.start_effect(note)
  else:
   v.update_effect(tick,note)

 def _row_effect(self,ch,note):
  st=self.st;fx=note.fx;k=fx.kind;sl=self.song.sl
  if k==Fx.JUMP:
   tgt=min(fx.param,sl)
   if st.order==sl-1 and tgt==0:
    # jumping from the last order back to the start would never end
    log.debug("B00 on last order %d: ending",st.order)
    tgt=sl
   st.jump=tgt
  elif k==Fx.BREAK:
   r=fx.x*10+fx.y
   st.brk=r if r<ROWS else 0
  elif k==Fx.PATTERN_LOOP:
   v=self.voices[ch]
   if fx.x==0:v.loop_row=st.row
   elif v.loop_cnt==0:v.loop_cnt=fx.x;st.loop_to=v.loop_row
   else:
    v.loop_cnt-=1
    if v.loop_cnt:st.loop_to=v.loop_row
  elif k==Fx.PATTERN_DELAY:
   if not st.pdelay:st.pdelay=fx.x
  elif k==Fx.SET_SPEED:
   if fx.param:st.spd=fx.param
  elif k==Fx.SET_TEMPO:
   st.set_bpm(fx.param)
   log.debug("tempo %d bpm, %d samples/tick",st.bpm,st.spt)

 # ── advance ─────────────────────────────────────────────────────────────────

 def _next_row(self):
  st=self.st
  if st.loop_to>=0:
   log.debug("ch loop: order %d row %d -> %d",st.order,st.row,st.loop_to)
   st.row=st.loop_to
  elif st.jump>=0 or st.brk>=0:
   # jump wins the order, break the row
   o=st.jump if st.jump>=0 else st.order+1
   r=st.brk if st.brk>=0 else 0
   log.debug("%s: order %d row %d -> order %d row %d",
             label(Fx.JUMP if st.jump>=0 else Fx.BREAK),st.order,st.row,o,r)
   if (o,r) in st.visited:
    log.debug("order %d row %d already played: ending",o,r)
    st.ended=True
   else:self._enter(o,r)
  elif st.row+1<ROWS:st.row+=1
  else:self._enter(st.order+1,0)
  st.jump=st.brk=st.loop_to=-1

 def _enter(self,order,row):
  if order!=self.st.order:
   for v in self.voices:v.loop_row=v.loop_cnt=0
  self.st.order=order;self.st.row=row
