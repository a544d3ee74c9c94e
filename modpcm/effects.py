"""Effect column decoding.

The raw (number, param) pair of a pattern cell is split once into an Effect:
a kind from Fx plus the parameter byte and its two nibbles. Voice and
Sequencer branch on the kind and never re-split nibbles themselves.
"""
from collections import namedtuple
from enum import IntEnum

class Fx(IntEnum):
 ARPEGGIO=0x00
 SLIDE_UP=0x01
 SLIDE_DOWN=0x02
 PORTA=0x03
 VIBRATO=0x04
 PORTA_VOLSLIDE=0x05
 VIBRATO_VOLSLIDE=0x06
 TREMOLO=0x07
 PANNING=0x08
 SAMPLE_OFFSET=0x09
 VOLSLIDE=0x0A
 JUMP=0x0B
 SET_VOLUME=0x0C
 BREAK=0x0D
 SET_SPEED=0x0F
 SET_TEMPO=0x1F
 # 0xE sub-commands: 0xE0 | x
 FILTER=0xE0
 FINE_SLIDE_UP=0xE1
 FINE_SLIDE_DOWN=0xE2
 GLISSANDO=0xE3
 VIBRATO_WAVE=0xE4
 FINETUNE=0xE5
 PATTERN_LOOP=0xE6
 TREMOLO_WAVE=0xE7
 COARSE_PANNING=0xE8
 RETRIGGER=0xE9
 FINE_VOL_UP=0xEA
 FINE_VOL_DOWN=0xEB
 NOTE_CUT=0xEC
 NOTE_DELAY=0xED
 PATTERN_DELAY=0xEE
 INVERT_LOOP=0xEF

# x/y are the high/low nibbles of param; for 0xE sub-commands x is the
# sub-command value (low nibble) and y is unused (0)
Effect=namedtuple('Effect','kind param x y')

def decode(number,param):
 """(effect number 0..15, param byte) -> Effect"""
 number&=0xF;param&=0xFF
 hi,lo=param>>4,param&0xF
 if number==0xE:return Effect(Fx(0xE0|hi),param,lo,0)
 if number==0xF:return Effect(Fx.SET_SPEED if param<32 else Fx.SET_TEMPO,param,hi,lo)
 return Effect(Fx(number),param,hi,lo)

def label(kind):
 """'E6x'-style label for logs."""
 if kind>=0xE0:return 'E%Xx'%(kind&0xF)
 if kind in(Fx.SET_SPEED,Fx.SET_TEMPO):return 'Fxx'
 return '%Xxx'%kind
