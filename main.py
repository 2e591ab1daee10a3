# main.py

"""Streamlit playground for log redaction policies.

Paste a JSON policy and a few log lines to see how each line would be
written once the policy is active.
"""

import streamlit as st
import logging
from log_redactor import RedactionEngine
from log_redactor.core.exceptions import PolicyLoadError
from log_redactor.logging_config import configure_logging
from log_redactor.service.config import settings

configure_logging(settings.log_level, settings.structured_logging)

logger = logging.getLogger(__name__)

EXAMPLE_POLICY = """{
  "version": 1,
  "rules": [
    { "description": "US social security numbers",
      "trigger": "SSN",
      "search": "\\\\d{3}-\\\\d{2}-\\\\d{4}",
      "replace": "XXX-XX-XXXX" },
    { "description": "Passwords in key=value form",
      "search": "password=\\\\S+",
      "replace": "password=***" }
  ]
}"""


def main():
    """Run the Streamlit application UI.

    Builds a RedactionEngine from the policy text on every click and shows
    the redacted log lines, or the load error if the policy is invalid.
    """
    st.set_page_config(layout="wide", page_title="Log Redaction Playground")

    st.title("Log Redaction Playground")
    st.markdown("Try a redaction policy against sample log lines before deploying it.")
    st.markdown("---")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Policy")
        policy_text = st.text_area("Policy JSON", value=EXAMPLE_POLICY, height=300)

        st.subheader("Log Lines")
        log_text = st.text_area(
            "Sample messages",
            height=200,
            placeholder="SSN: 123-45-6789\nlogin ok password=hunter2",
        )

    with col2:
        st.subheader("Redacted Output")

        if st.button("Redact", type="primary"):
            try:
                engine = RedactionEngine.from_text(policy_text, source="playground")

            except PolicyLoadError as e:
                st.error(f"Policy rejected: {e}")
                logger.warning(
                    "Playground policy rejected", extra={"error_type": type(e).__name__}
                )

            else:
                lines = log_text.splitlines()
                redacted = [engine.redact(line) for line in lines]
                changed = sum(1 for a, b in zip(lines, redacted) if a != b)

                st.text_area("Redacted messages", value="\n".join(redacted), height=400)
                st.success(
                    f"{engine.rule_count} rules loaded, {changed} of {len(lines)} lines redacted."
                )

    with st.sidebar:
        st.header("Policy format")
        st.markdown("""
        - **version** must be `1`
        - **trigger**: substring that must appear before the regex is tried (optional)
        - **search**: regular expression, required
        - **replace**: replacement, may use `\\1` or `\\g<name>` back-references
        """)


if __name__ == "__main__":
    main()
