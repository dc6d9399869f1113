"""
Recipe submission UI for RECOOK BOOK.
"""

import streamlit as st

from models import RECIPE_CATEGORIES, MIN_PREP_TIME_MINUTES, MAX_PREP_TIME_MINUTES
from services import SiteController
from .renderer import StreamlitRenderer


class RecipeSubmissionForm:
    """Share-a-recipe form; one ingredient or step per line"""

    SUBMITTED_KEY = "recipe_just_submitted"

    def __init__(self, controller: SiteController, renderer: StreamlitRenderer):
        self.controller = controller
        self.renderer = renderer

    def render_submit_page(self):
        st.title("🍳 Share a Leftover Recipe")

        submitted_title = st.session_state.get(self.SUBMITTED_KEY)
        if submitted_title:
            st.success(f"✅ \"{submitted_title}\" is now live in the recipe collection!")
            if st.button("➕ Add another recipe"):
                st.session_state.pop(self.SUBMITTED_KEY, None)
                st.rerun()
            return

        with st.form("recipe_form", clear_on_submit=False):
            title = st.text_input("Recipe Title *")

            col1, col2 = st.columns([1, 1])
            with col1:
                category = st.selectbox(
                    "Category *", [""] + RECIPE_CATEGORIES,
                    format_func=lambda c: c.title() if c else "Select a category"
                )
            with col2:
                prep_time = st.number_input(
                    "Prep Time (minutes) *",
                    min_value=0, max_value=MAX_PREP_TIME_MINUTES, value=MIN_PREP_TIME_MINUTES, step=1
                )

            leftover_ingredients = st.text_area(
                "Leftover Ingredients *", placeholder="One ingredient per line"
            )
            additional_ingredients = st.text_area(
                "Additional Ingredients", placeholder="One ingredient per line (optional)"
            )
            instructions = st.text_area("Instructions *", placeholder="One step per line")
            tips = st.text_area("Tips", placeholder="Any tips or variations (optional)")
            author = st.text_input("Your Name *")

            share_clicked = st.form_submit_button("🍽️ Share Recipe", type="primary")

        if share_clicked:
            recipe = self.controller.submit_recipe({
                'title': title,
                'category': category,
                'prep_time': prep_time,
                'leftover_ingredients': leftover_ingredients,
                'additional_ingredients': additional_ingredients,
                'instructions': instructions,
                'tips': tips,
                'author': author
            })
            self.renderer.show_field_errors()
            if recipe:
                st.session_state[self.SUBMITTED_KEY] = recipe.title
                st.rerun()
