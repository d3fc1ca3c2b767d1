"""
Streamlit UI for the Movie Q&A Bot.
Calls the local FastAPI server at http://localhost:3001 to answer questions,
or runs the engine in-process when the API is unreachable.

Run API (optional):   uvicorn api:app --port 3001
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import Optional  # indicates values can be None

# Local engine imports for fallback/local mode (when API isn't used)
from moviebot.config import get_settings  # dataset path and provider settings
from moviebot.data_loader import build_catalog  # load catalog from CSV
from moviebot.exceptions import EmptyQueryError  # blank question
from moviebot.llm_providers import build_provider  # configured provider
from moviebot.qa_engine import MovieQAEngine  # interpret + retrieve + compose

# Default URL where the FastAPI server is expected to run locally
DEFAULT_API_URL = "http://localhost:3001"  # default API base URL

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Q&A Bot", layout="centered")

# Main page title
st.title("🎬 Movie Q&A Bot")  # friendly header


# Cache the local engine so the catalog is loaded once per session
@st.cache_resource(show_spinner=True)
def init_local_engine() -> Optional[MovieQAEngine]:
	"""Create a local engine from the configured CSV and provider."""
	try:
		settings = get_settings()
		engine = MovieQAEngine(build_catalog(settings.movies_csv_path), build_provider(settings))
		return engine  # success
	except Exception as e:
		# Show an error in the UI so users know local mode failed
		st.error(f"Failed to initialize local engine: {e}")
		return None  # signal failure


# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", DEFAULT_API_URL)  # where the API lives
	use_local = st.toggle("Use local engine", value=False, help="If enabled or API is unreachable, the app will run fully locally.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/api/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
		if api_available:
			info = h.json()
			st.sidebar.caption(f"{info.get('moviesLoaded', 0)} movies | LLM: {info.get('llmType', 'none')}")
	except requests.RequestException:
		api_available = False  # health check failed
		st.sidebar.info("API not reachable; will use local engine.")  # inform user

# Initialize local engine only when needed (user toggle or API not available)
local_engine: Optional[MovieQAEngine] = None  # placeholder
if use_local or not api_available:
	with st.spinner("Initializing local engine..."):
		local_engine = init_local_engine()
		if local_engine is not None:
			st.sidebar.success("Local engine ready.")  # success note
		else:
			st.sidebar.error("Local engine failed to initialize.")  # error note

# Chat history lives in the browser session only
if "history" not in st.session_state:
	st.session_state.history = []

for turn in st.session_state.history:
	with st.chat_message(turn["role"]):
		st.markdown(turn["content"])

question = st.chat_input("e.g., Who is the director of The Godfather?")

if question:
	st.session_state.history.append({"role": "user", "content": question})
	with st.chat_message("user"):
		st.markdown(question)

	with st.chat_message("assistant"):
		with st.spinner("Thinking..."):
			try:
				if local_engine is not None:
					# Local mode: run the full pipeline inside this process
					ans = local_engine.answer(question)
					payload = {
						"response": ans.response,
						"queryType": ans.query_type.value,
						"matches": ans.matches,
						"llmUsed": ans.llm_used,
					}
				else:
					# API mode: the server does the work
					resp = requests.post(f"{api_url}/api/query", json={"query": question}, timeout=120)
					payload = resp.json()  # error payloads also carry a 'response'
				st.markdown(payload["response"])
				if "queryType" in payload:
					st.caption(
						f"Type: {payload['queryType']} | Matches: {payload['matches']} | "
						f"{'LLM on' if payload['llmUsed'] else 'Templates only'}"
					)
				st.session_state.history.append({"role": "assistant", "content": payload["response"]})
			except EmptyQueryError:
				st.warning("Please provide a question about movies.")
			except requests.RequestException as e:  # network/API errors
				st.error(f"API request failed: {e}")

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if local_engine is not None:
	st.sidebar.caption("Mode: Local engine")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --port 3001 is running)")  # mode label
