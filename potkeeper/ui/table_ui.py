"""
Streamlit UI for potkeeper.

Run with ``streamlit run potkeeper/ui/table_ui.py``. The page keeps one
TableState in the Streamlit session and calls the pure ledger transitions
directly; a rejected action shows its message inline and leaves the table
as it was.
"""

import streamlit as st

from potkeeper.ledger import HandOutcome, LedgerError, StateTransitionEngine
from potkeeper.ledger.advisory import HouseRules, available_actions, check_bet, quick_bets
from potkeeper.ledger.messages import format_entry_amount, render_entry, supported_locales
from potkeeper.ledger.money import format_amount
from potkeeper.ledger.report import player_balances, plot_pot_history


class TableUI:
    """Streamlit presentation layer around a single table."""

    def __init__(self):
        if "table_state" not in st.session_state:
            st.session_state.table_state = None
            st.session_state.selected_challenger = None
            st.session_state.bet_amount = ""
            st.session_state.error = None

    @property
    def state(self):
        return st.session_state.table_state

    def apply(self, transition, *args):
        """Run a transition, keeping the old state if the ledger rejects it."""
        try:
            st.session_state.table_state = transition(self.state, *args)
            st.session_state.error = None
            return True
        except LedgerError as exc:
            st.session_state.error = str(exc)
            return False

    def render_setup(self):
        st.subheader("New table")
        with st.form("setup_form"):
            roster = st.text_area("Players, one per line, in turn order")
            ante = st.number_input("Ante", min_value=0.01, value=0.20, step=0.05)
            submit = st.form_submit_button("Start game")

        if submit:
            names = [line.strip() for line in roster.splitlines() if line.strip()]
            try:
                st.session_state.table_state = StateTransitionEngine.initialize(
                    names, str(ante)
                )
                st.session_state.error = None
            except LedgerError as exc:
                st.session_state.error = str(exc)
            st.rerun()

    def render_table(self, locale, rules):
        state = self.state
        dealer = state.dealer

        header = st.columns(3)
        header[0].metric("Pot", format_amount(state.pot))
        header[1].metric("Dealer", dealer.name if dealer else "-")
        header[2].metric("Dealer orbit", state.dealer_round)

        actions = available_actions(state)

        if actions["start_round"]:
            if st.button(f"Collect ante ({format_amount(state.total_ante)})"):
                if self.apply(StateTransitionEngine.start_round):
                    st.session_state.selected_challenger = (
                        StateTransitionEngine.next_challenger_id(self.state)
                    )
                st.rerun()

        if actions["record_hand"]:
            self.render_hand_form(rules)

        if actions["close_bank"] and st.button("Close bank and pass the turn"):
            self.apply(StateTransitionEngine.close_bank)
            st.rerun()

        st.subheader("Log")
        for entry in state.recent_logs():
            amount = format_entry_amount(entry) or ""
            st.write(f"`{entry.kind.value}` {render_entry(entry, state, locale)} {amount}")

        if state.logs:
            st.subheader("Session")
            st.dataframe(player_balances(state)[["name", "net"]])
            st.pyplot(plot_pot_history(state))

    def render_hand_form(self, rules):
        state = self.state
        challengers = state.challengers
        ids = [p.id for p in challengers]
        selected = st.session_state.selected_challenger
        index = ids.index(selected) if selected in ids else 0

        challenger_id = st.selectbox(
            "Challenger",
            ids,
            index=index,
            format_func=lambda pid: state.get_player(pid).name,
        )

        bets = quick_bets(state, rules)
        cols = st.columns(len(bets))
        for col, bet in zip(cols, bets):
            label = f"{bet.kind.value} ({format_amount(bet.amount)})"
            if col.button(label, disabled=not bet.enabled, help=bet.reason):
                st.session_state.bet_amount = str(bet.amount)

        amount = st.text_input("Amount", key="bet_amount")
        problem = check_bet(state, amount) if amount else None
        if problem is not None:
            st.warning(str(problem))

        win_col, lose_col = st.columns(2)
        if win_col.button("Challenger wins", disabled=not amount or problem is not None):
            self.settle(challenger_id, amount, HandOutcome.CHALLENGER_WINS)
        if lose_col.button("Bank wins", disabled=not amount):
            self.settle(challenger_id, amount, HandOutcome.DEALER_WINS)

    def settle(self, challenger_id, amount, outcome):
        if self.apply(StateTransitionEngine.record_hand, challenger_id, amount, outcome):
            st.session_state.selected_challenger = (
                StateTransitionEngine.next_challenger_id(self.state, challenger_id)
                if self.state.round_active
                else None
            )
        st.rerun()

    def exit(self):
        if self.state is not None:
            StateTransitionEngine.exit(self.state)
        st.session_state.table_state = None
        st.session_state.selected_challenger = None


def run_streamlit_app():
    """Run the Streamlit app."""
    st.set_page_config(page_title="potkeeper", layout="wide")
    st.title("potkeeper")

    ui = TableUI()

    with st.sidebar:
        locale = st.selectbox("Language", supported_locales())
        rules = HouseRules(
            allow_all_in_first_orbit=st.checkbox("All-in on the first orbit")
        )
        if ui.state is not None and st.button("Leave table"):
            ui.exit()
            st.rerun()

    if st.session_state.error:
        st.error(st.session_state.error)

    if ui.state is None:
        ui.render_setup()
    else:
        ui.render_table(locale, rules)


if __name__ == "__main__":
    run_streamlit_app()
