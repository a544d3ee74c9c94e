import pytest
from modpcm.effects import Fx,decode,label

@pytest.mark.parametrize('num,prm,kind,x,y',[
 (0x0,0x00,Fx.ARPEGGIO,0,0),
 (0x0,0x47,Fx.ARPEGGIO,4,7),
 (0x3,0x10,Fx.PORTA,1,0),
 (0x4,0x8F,Fx.VIBRATO,8,15),
 (0xA,0x0C,Fx.VOLSLIDE,0,12),
 (0xD,0x10,Fx.BREAK,1,0),
 (0xE,0x62,Fx.PATTERN_LOOP,2,0),
 (0xE,0xD3,Fx.NOTE_DELAY,3,0),
 (0xE,0x00,Fx.FILTER,0,0),
 (0xE,0xFF,Fx.INVERT_LOOP,15,0),
 (0xF,0x00,Fx.SET_SPEED,0,0),
 (0xF,0x1F,Fx.SET_SPEED,1,15),
 (0xF,0x20,Fx.SET_TEMPO,2,0),
 (0xF,0xFF,Fx.SET_TEMPO,15,15),
])
def test_decode(num,prm,kind,x,y):
 fx=decode(num,prm)
 assert fx.kind==kind and fx.param==prm
 assert (fx.x,fx.y)==(x,y)

def test_every_cell_decodes():
 seen={decode(n,p).kind for n in range(16) for p in range(256)}
 # 14 plain commands + 2 speed/tempo + 16 extended
 assert len(seen)==32
 assert Fx.PANNING in seen

def test_label():
 assert label(Fx.PATTERN_LOOP)=='E6x'
 assert label(Fx.SET_TEMPO)=='Fxx'
 assert label(Fx.JUMP)=='Bxx'
