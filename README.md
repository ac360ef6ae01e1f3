# rpsarena

Pieces for a game of rock, paper, scissors: players and a computer opponent,
a match set up locally or over the local network, discovery of hosted games,
and pygame sprites, buttons, text labels and a name input box.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Deciding a round

```python
from rpsarena.game import check_win
from rpsarena.player import Choice

check_win(Choice.ROCK, Choice.SCISSORS)   # 1: the first hand wins
check_win(Choice.PAPER, Choice.PAPER)     # 0: a draw
check_win(Choice.PAPER, Choice.SCISSORS)  # -1: the first hand loses
str(Choice.ROCK)                          # "Rock"
```

## Playing on the console

`Game` sets the two players up in a background thread. `Game.run` then plays
rounds on the console: it shows the score, asks for `r`, `p` or `s` (or
`rock`, `paper`, `scissors`, `0`, `1`, `2`), gets the opponent's hand, prints
the result and waits for Enter. It stops when input ends.

```python
from rpsarena.config import PlayerType
from rpsarena.game import Game

game = Game(computer_think_time=0)
game.setup("alice", PlayerType.OFFLINE)
game.wait_for_setup()
game.run()
```

Offline, the opponent is `Computer`, which picks a random hand after a pause
(1.5 seconds by default).

## Playing over the network

One side hosts and the other joins:

```python
host = Game()
host.setup("alice", PlayerType.HOST)

guest = Game()
guest.setup("bob", PlayerType.CLIENT, ("192.168.1.10", 48051))
```

The host listens on TCP port 48051, answers discovery requests with
"*name*'s server" until a player connects, and then both sides exchange names.
`setup_finished`, `server_error` and `connection_error` report how setup went;
`move_player` and `move_enemy` hand the two players over; `deinitialize`
closes every socket and waits for the setup thread.

Games on the local network are found with `BroadcastSocket`:

```python
from rpsarena.broadcast import BroadcastSocket

with BroadcastSocket() as finder:
    finder.search_once()
    servers = finder.get_results()   # [(name, (ip, port)), ...]
```

Messages between the players travel in fixed 256-byte frames of UTF-8 text
padded with NUL bytes; a choice is sent as its number (0 rock, 1 paper,
2 scissors). Socket failures raise `rpsarena.connection.NetworkError`.

## Drawing

`rpsarena.sprites` has `Sprite`, `MovingSprite`, `RotatingSprite`, `Button`
and `TextButton`; `rpsarena.text.Text` draws a label; `rpsarena.input_field.
InputField` takes up to ten printable characters; `rpsarena.background.
Background` spawns drifting sprites. Buttons and the input field read the
mouse and keyboard through pygame unless given a `pointer` or `keyboard`
callable. Textures, sounds and fonts come from the shared
`rpsarena.resources.resource_manager()`, which falls back to a black
placeholder texture or pygame's default font when a key is unknown or a file
cannot be loaded.

## What is not included

The package has no command to start it and no game window: there are no
intro, menu, lobby, server list or match screens, and no main loop tying the
sprites, background and match together. The only ready-made way to play is
`Game.run` on the console.