import argparse,logging,sys,traceback
from pathlib import Path
from . import loader,mixer,player
from .consts import SR
from .song import MalformedModule

G='\033[1;32m';D='\033[90m';R='\033[0m';Y='\033[33m'

def main(argv=None):
 p=argparse.ArgumentParser(prog='modpcm',description='Render an Amiga tracker module to 8-bit mono PCM')
 p.add_argument('module',help='.mod file')
 p.add_argument('--channels',type=int,default=None,help='channel count (default: from the tag at 1080)')
 p.add_argument('--instruments',type=int,default=None,help='instrument count (default: 31)')
 p.add_argument('--rate',type=int,default=SR,help=f'output sample rate (default {SR})')
 p.add_argument('--out',default=None,help='write raw signed 8-bit PCM here instead of playing')
 p.add_argument('-v','--verbose',action='store_true')
 a=p.parse_args(argv)
 if a.verbose:logging.basicConfig(level=logging.DEBUG,format='%(name)s: %(message)s')

 try:
  song=loader.load(a.module,a.channels,a.instruments)
 except (OSError,MalformedModule) as e:
  print(f"{Y}>> {e}{R}",file=sys.stderr);return 1
 print(f"  {G}{Path(a.module).name}{R}  {D}{song.title or '(untitled)'}  "
       f"[{song.nc}ch  {len(song.smp)}smp  {song.sl}ord]{R}")
 try:
  pcm=mixer.render(song,rate=a.rate)
  print(f"  {D}{len(pcm)} samples, {len(pcm)/a.rate:.1f}s @ {a.rate} Hz{R}")
  if a.out:
   player.write_raw(pcm,a.out);print(f"  -> {a.out}")
  else:
   player.play(pcm,a.rate)
 except KeyboardInterrupt:
  return 130
 except Exception:
  traceback.print_exc();return 2
 return 0
