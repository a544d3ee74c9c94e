import math

SR=44100
# Amiga clock (NTSC) for period -> Hz
AMIGA_CLOCK=7159090
PERIOD_MIN=108;PERIOD_MAX=907
VOL_MAX=64
ROWS=64;ORDERS=128
BPM=125;SPEED=6

# header field sizes, tag offset
TITLE_LEN=20;SMP_NAME=22
TAG_OFF=1080

# 64-step oscillator tables for vibrato/tremolo (values -1..1)
SINE=[math.sin(math.pi*2*i/64) for i in range(64)]
RAMP=[1.0-i/32.0 for i in range(64)]
SQUARE=[1.0 if i<32 else -1.0 for i in range(64)]
WAVES=(SINE,RAMP,SQUARE,SINE)

MOD_TAGS={b'M.K.':4,b'M!K!':4,b'FLT4':4,b'4CHN':4,b'6CHN':6,b'8CHN':8,
 b'FLT8':8,b'2CHN':2,b'10CH':10,b'12CH':12,b'16CH':16,b'32CH':32}
