from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .cards import Shoe
from .constants import DEALER_NAME, PLAYER_NAME_FORMAT
from .hand import Hand
from .rules import Rules
from .stats import GameStats
from .types import Action, HandView, Observation, Outcome, Phase, parse_action


def initialize_hands(num_players: int, rules: Rules) -> List[Hand]:
    hands = [Hand(PLAYER_NAME_FORMAT.format(index=i + 1), rules.max_hand_size) for i in range(num_players)]
    hands.append(Hand(DEALER_NAME, rules.max_hand_size))
    return hands


def compare_hands(player: Hand, dealer: Hand) -> Outcome:
    player_score = player.score()
    dealer_score = dealer.score()
    if player.is_busted:
        return Outcome.LOSS
    if dealer.is_busted:
        return Outcome.WIN
    if player_score > dealer_score:
        return Outcome.WIN
    if player_score == dealer_score:
        return Outcome.TIE
    return Outcome.LOSS


def should_end_round_early(stats: GameStats, rules: Rules) -> bool:
    if not stats.dealer_blackjack:
        return False
    if rules.end_round_on_dealer_blackjack:
        return True
    return not any(stats.player_blackjack)


class BlackjackTable:
    """Runs rounds for up to ``rules.max_players`` players against the dealer.

    The shoe and stats are owned by the caller and survive across rounds; hands
    are rebuilt every round. ``agent`` may be a single decision provider shared
    by every seat or a sequence with one provider per player. Each provider
    exposes ``act(observation, info)`` returning an ``Action`` or a
    ``"hit"``/``"stand"`` token; anything else is asked again.
    """

    def __init__(
        self,
        shoe: Shoe,
        num_players: int,
        stats: GameStats,
        rules: Optional[Rules] = None,
        log_fn: Optional[Callable[[Dict], None]] = None,
    ):
        self.rules = rules or Rules()
        if num_players < 1 or num_players > self.rules.max_players:
            raise ValueError(f"num_players must be between 1 and {self.rules.max_players}, got {num_players}")
        if stats.num_players != num_players:
            raise ValueError(f"stats track {stats.num_players} player(s), table has {num_players}")
        self.shoe = shoe
        self.num_players = num_players
        self.stats = stats
        self.log_fn = log_fn
        self.hands: List[Hand] = []
        self.phases: List[Phase] = []

    @property
    def dealer(self) -> Hand:
        return self.hands[-1]

    @property
    def players(self) -> List[Hand]:
        return self.hands[:-1]

    def _emit(self, event: Dict) -> None:
        if self.log_fn is not None:
            self.log_fn(event)

    def _enter(self, phase: Phase) -> None:
        self.phases.append(phase)
        self._emit({"event": "phase", "phase": phase.name})

    def _agent_for(self, agent: Any, index: int) -> Any:
        if isinstance(agent, (list, tuple)):
            return agent[index]
        return agent

    # API: one call = one complete round, from the deal to the collect
    def play_round(self, agent: Any) -> Dict:
        self.phases = []
        self.hands = initialize_hands(self.num_players, self.rules)
        self.stats.record_round_start()
        trace: Dict = {"decisions": []}
        self._emit({"event": "round_start", "round": self.stats.total_rounds + 1, "players": self.num_players})

        self._enter(Phase.DEALING)
        self._deal()

        self._enter(Phase.BLACKJACK_CHECK)
        self._check_blackjack()
        skipped = should_end_round_early(self.stats, self.rules)

        if not skipped:
            self._enter(Phase.PLAYER_TURNS)
            for i, hand in enumerate(self.players):
                if hand.is_blackjack:
                    continue
                self._player_turn(i, hand, self._agent_for(agent, i), trace)
            self._enter(Phase.DEALER_TURN)
            self._dealer_play()

        self._enter(Phase.SHOWDOWN)
        self._emit({"event": "reveal", "final": True, "hands": self._hand_views(mask_dealer=False)})
        outcomes = self.determine_winner()
        summary = self._summary(trace, outcomes, skipped)

        self._enter(Phase.COLLECT)
        self._collect()
        summary["phases"] = [p.name for p in self.phases]
        return summary

    def _deal(self) -> None:
        for _ in range(self.rules.starting_cards):
            for hand in self.hands:
                hand.add_card(self.shoe.draw())
                self._emit({"event": "deal", "owner": hand.owner, "cards_in_hand": hand.num_cards})
        self._emit({"event": "deal_complete"})
        self._emit({"event": "reveal", "final": False, "hands": self._hand_views(mask_dealer=True)})

    def _check_blackjack(self) -> None:
        self.stats.dealer_blackjack = self.dealer.is_blackjack
        for i, hand in enumerate(self.players):
            self.stats.player_blackjack[i] = hand.is_blackjack
            if self.stats.player_blackjack[i]:
                self._emit({"event": "blackjack", "owner": hand.owner})
        if self.stats.dealer_blackjack:
            self._emit({"event": "blackjack", "owner": self.dealer.owner})

    def _observation(self, index: int, hand: Hand) -> Observation:
        hv = HandView(
            owner=hand.owner,
            cards=hand.labels(),
            total=hand.score(),
            is_soft=hand.is_soft,
        )
        up = self.dealer.up_card
        return Observation(
            player=hv,
            dealer_upcard=up.label() if up is not None else "",
            player_index=index,
            num_players=self.num_players,
            allowed_actions=[Action.HIT, Action.STAND],
            cards_until_reshuffle=self.shoe.until_reshuffle(),
        )

    def _request_action(self, index: int, hand: Hand, agent: Any, trace: Dict) -> Action:
        # no retry limit: an invalid reply is simply asked again
        while True:
            obs = self._observation(index, hand)
            meta: Dict = {}
            decision = agent.act(obs, info=meta)
            action = parse_action(decision)
            trace["decisions"].append({
                "player_index": index,
                "cards": obs.player.cards,
                "total": obs.player.total,
                "is_soft": obs.player.is_soft,
                "dealer_upcard": obs.dealer_upcard,
                "decision": action.name if action is not None else str(decision),
                "valid": action is not None,
                "meta": meta,
            })
            if action is not None:
                return action
            self._emit({"event": "invalid_decision", "owner": hand.owner, "decision": str(decision)})

    def _player_turn(self, index: int, hand: Hand, agent: Any, trace: Dict) -> None:
        while True:
            up = self.dealer.up_card
            self._emit({
                "event": "turn",
                "owner": hand.owner,
                "cards": hand.labels(),
                "total": hand.score(),
                "dealer_upcard": up.label() if up is not None else "",
            })
            action = self._request_action(index, hand, agent, trace)
            if action == Action.STAND:
                self._emit({"event": "stand", "owner": hand.owner, "total": hand.score()})
                return
            card = self.shoe.draw()
            if not hand.add_card(card):
                # hand is full; the drawn card is discarded
                self._emit({"event": "card_dropped", "owner": hand.owner, "card": card.label(), "total": hand.score()})
                continue
            self._emit({"event": "hit", "owner": hand.owner, "card": card.label(), "total": hand.score()})
            if hand.is_busted:
                self._emit({"event": "bust", "owner": hand.owner, "cards": hand.labels(), "total": hand.score()})
                return

    def _dealer_play(self) -> None:
        dealer = self.dealer
        while dealer.score() < self.rules.dealer_stand:
            card = self.shoe.draw()
            if not dealer.add_card(card):
                break  # hand is full
            self._emit({"event": "dealer_draw", "card": card.label(), "total": dealer.score()})
        if dealer.is_busted:
            self._emit({"event": "bust", "owner": dealer.owner, "cards": dealer.labels(), "total": dealer.score()})

    def determine_winner(self) -> List[Outcome]:
        """Settle every player against the dealer and fold the results into stats."""
        dealer = self.dealer
        dealer_blackjack = dealer.is_blackjack
        if dealer_blackjack:
            self.stats.dealer_blackjacks += 1
            if not any(self.stats.player_blackjack):
                self.stats.dealer_wins += 1

        outcomes: List[Outcome] = []
        for i, hand in enumerate(self.players):
            blackjack_win = False
            if self.stats.player_blackjack[i]:
                if dealer_blackjack:
                    outcome = Outcome.TIE
                    detail = f"{hand.owner} ties the dealer's Blackjack."
                else:
                    outcome = Outcome.WIN
                    blackjack_win = True
                    detail = f"{hand.owner} wins with a Blackjack!"
            else:
                outcome = compare_hands(hand, dealer)
                if outcome == Outcome.LOSS and not hand.is_busted and not dealer_blackjack:
                    self.stats.dealer_wins += 1
                detail = _outcome_detail(hand, dealer, outcome)
            self.stats.record_outcome(i, outcome, blackjack=blackjack_win)
            outcomes.append(outcome)
            self._emit({
                "event": "outcome",
                "owner": hand.owner,
                "player_index": i,
                "result": outcome.value,
                "blackjack": blackjack_win,
                "detail": detail,
            })

        self.stats.finalize_round()
        self._emit({
            "event": "round_complete",
            "stats": self.stats.as_dict(),
            "lines": self.stats.summary_lines(),
        })
        return outcomes

    def _collect(self) -> None:
        for hand in self.hands:
            hand.clear()
        self.shoe.current_card = 0
        self.shoe.shuffle(reason="collect")
        self._emit({"event": "collect"})

    def _hand_views(self, mask_dealer: bool) -> List[Dict]:
        views = []
        for hand in self.hands:
            if hand.is_dealer and mask_dealer:
                up = hand.up_card
                views.append({
                    "owner": hand.owner,
                    "cards": ["??"] + ([up.label()] if up is not None else []),
                    "total": None,
                    "masked": True,
                })
            else:
                views.append({
                    "owner": hand.owner,
                    "cards": hand.labels(),
                    "total": hand.score(),
                    "masked": False,
                })
        return views

    def _summary(self, trace: Dict, outcomes: List[Outcome], skipped: bool) -> Dict:
        return {
            "dealer": self.dealer.labels(),
            "dealer_total": self.dealer.score(),
            "hands": [h.labels() for h in self.players],
            "totals": [h.score() for h in self.players],
            "outcomes": [o.value for o in outcomes],
            "turns_skipped": skipped,
            "trace": trace,
        }


def _outcome_detail(player: Hand, dealer: Hand, outcome: Outcome) -> str:
    if outcome == Outcome.LOSS:
        if player.is_busted:
            return f"{player.owner} busted!"
        return f"{player.owner} loses against the dealer."
    if outcome == Outcome.WIN:
        if dealer.is_busted:
            return f"{player.owner} wins, the dealer busted!"
        return f"{player.owner} wins against the dealer!"
    return f"{player.owner} ties with the dealer."


def play_round(
    shoe: Shoe,
    num_players: int,
    stats: GameStats,
    agent: Any,
    rules: Optional[Rules] = None,
    log_fn: Optional[Callable[[Dict], None]] = None,
) -> Dict:
    """Play one full round at a fresh table, updating ``stats`` in place."""
    table = BlackjackTable(shoe, num_players, stats, rules=rules, log_fn=log_fn)
    return table.play_round(agent)
