from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

from flatdesk import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5001))  # Default to 5001 if not in .env
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_DEBUG", "false").lower() == "true")
