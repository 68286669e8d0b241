from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from listing_web.api import APIError, ListingAPI
from listing_web.catalog import find_property, load_properties
from listing_web.config import Config
from listing_web.views import load_review_list

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the pages process (the API keeps its own setup)."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def create_app(config_object=Config, *, api=None, properties=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)

    if api is None:
        api = ListingAPI(app.config["API_BASE_URL"], timeout=app.config["API_TIMEOUT"])
    if properties is None:
        properties = load_properties(app.config["PROPERTIES_FILE"])

    @app.template_filter("number")
    def number(value):
        # 120.0 -> 120, 99.5 -> 99.5
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @app.context_processor
    def inject_shell():
        return {"app_title": app.config["APP_TITLE"], "app_description": app.config["APP_DESCRIPTION"]}

    @app.get("/")
    def index():
        return render_template("index.html", properties=properties)

    @app.route("/properties/<property_id>", methods=["GET", "POST"])
    def property_detail(property_id: str):
        # POST here adds a review
        if request.method == "POST":
            try:
                result = api.add_review(
                    property_id,
                    user_id=request.form.get("user_id", "").strip(),
                    user_name=request.form.get("user_name", "").strip(),
                    user_image=request.form.get("user_image", "").strip() or None,
                    rating=request.form.get("rating", "").strip(),
                    comment=request.form.get("comment", "").strip(),
                )
                flash(result.get("message") or "Review submitted.", "success")
            except APIError as e:
                flash(f"Could not add review: {e.message}", "danger")
            return redirect(url_for("property_detail", property_id=property_id))

        prop = find_property(properties, property_id)
        return render_template("property_detail.html", property=prop, property_id=property_id)

    @app.get("/properties/<property_id>/reviews")
    def review_list(property_id: str):
        view = load_review_list(api, property_id.strip())
        return render_template("components/review_list.html", view=view)

    return app


if __name__ == "__main__":
    configure_logging(Config.LOG_LEVEL)
    create_app().run(host="127.0.0.1", port=5000, debug=True)
