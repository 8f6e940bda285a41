# curated_lists.py
# Static, versioned curation shipped with the app (not editable at runtime).

from models.records import CuratedEntry, ReadyList

CURATED_TOP_GAMES = (
    CuratedEntry("Stardew Valley", ("stardew valley",)),
    CuratedEntry("Red Dead Redemption 2", ("red dead redemption 2",)),
    CuratedEntry("The Last of Us Part I", ("the last of us part i", "last of us part i")),
    CuratedEntry("The Last of Us Part II", ("the last of us part ii", "last of us 2", "part ii")),
    CuratedEntry("Death Stranding", ("death stranding",)),
    CuratedEntry("Elden Ring", ("elden ring",)),
    CuratedEntry("Dark Souls 1", ("dark souls remastered", "dark souls prepare to die", "dark souls")),
    CuratedEntry("Sekiro", ("sekiro",)),
    CuratedEntry("Baldur's Gate 3", ("baldur", "gate 3")),
    CuratedEntry("The Witcher 3", ("witcher 3", "wild hunt")),
    CuratedEntry("The Witcher 2", ("witcher 2",)),
    CuratedEntry("Skyrim", ("skyrim",)),
    CuratedEntry("Cyberpunk 2077", ("cyberpunk",)),
    CuratedEntry("Hades", ("hades",)),
    CuratedEntry("Divinity: Original Sin 2", ("divinity original sin 2",)),
    CuratedEntry("Monster Hunter: World", ("monster hunter: world", "monster hunter world")),
    CuratedEntry("Monster Hunter Rise", ("monster hunter rise",)),
    CuratedEntry("Dark Souls III", ("dark souls iii", "dark souls 3")),
    CuratedEntry("No Man's Sky", ("no man's sky", "no mans sky")),
    CuratedEntry("Hollow Knight", ("hollow knight",)),
    CuratedEntry("Undertale", ("undertale",)),
    CuratedEntry("Portal", ("portal",)),
    CuratedEntry("Half-Life 2", ("half-life 2", "half life 2")),
    CuratedEntry("Resident Evil", ("resident evil",)),
    CuratedEntry("Cuphead", ("cuphead",)),
    CuratedEntry("RimWorld", ("rimworld",)),
    CuratedEntry("Project Zomboid", ("project zomboid",)),
    CuratedEntry("Forza Horizon 5", ("forza horizon 5",)),
    CuratedEntry("Yakuza 0", ("yakuza 0",)),
    CuratedEntry("Hogwarts Legacy", ("hogwarts legacy",)),
)

READY_LISTS = (
    ReadyList(
        id="quick-30",
        title="Jogos rapidos ate 30 min",
        subtitle="Partidas curtas para entrar e sair rapido",
        app_ids=(1794680, 1942280, 291550, 570, 730, 1276390, 960090, 391540, 400, 620),
        fallback_keywords=("casual", "arcade", "indie", "platformer", "shooter"),
    ),
    ReadyList(
        id="coop-today",
        title="Co-op pra jogar hoje",
        subtitle="Selecao pronta para fechar squad agora",
        app_ids=(1426210, 550, 218620, 548430, 322330, 648800, 892970, 1172620, 49520, 397540),
        fallback_keywords=("co-op", "online co-op", "multiplayer", "local co-op"),
    ),
    ReadyList(
        id="relax-after-work",
        title="Jogos relaxantes pra quem trabalha muito",
        subtitle="Baixa pressao, boa progressao e clima tranquilo",
        app_ids=(413150, 227300, 270880, 294100, 255710, 526870, 703080, 1222670, 281990, 359320),
        fallback_keywords=("simulation", "city", "building", "casual", "strategy", "adventure"),
    ),
)
