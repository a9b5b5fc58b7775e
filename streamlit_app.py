"""Streamlit interface for the CV Portfolio Builder API."""

import os
from typing import Any, Dict, List, Optional

import httpx
import streamlit as st
import streamlit.components.v1 as components

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TIMEOUT = 300.0  # AI calls can take a while

ACCEPTED_EXTENSIONS = ["pdf", "doc", "docx", "txt"]
VIBES = ["Professional & Serious", "Modern & Sleek", "Creative & Playful", "Minimalist & Clean"]
COLOR_PREFERENCES = ["Cool Blues", "Warm Earth Tones", "Vibrant & Energetic", "Monochromatic"]

# Page configuration
st.set_page_config(
    page_title="CV Portfolio Builder",
    page_icon="🎨",
    layout="wide",
    initial_sidebar_state="expanded"
)


def api_request(method: str, path: str, **kwargs) -> Optional[Dict[str, Any]]:
    """
    Call the API and show errors as toasts.

    Args:
        method: HTTP method
        path: API path, e.g. "/api/v1/portfolio"
        **kwargs: Passed to httpx (json, files, data, params)

    Returns:
        Decoded JSON body if successful, None otherwise
    """
    try:
        with httpx.Client(base_url=API_BASE_URL, timeout=API_TIMEOUT) as client:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        try:
            detail = e.response.json().get("detail", e.response.text)
        except ValueError:
            detail = e.response.text
        st.error(f"❌ {detail}")
        return None
    except httpx.HTTPError as e:
        st.error(f"Error communicating with the API: {str(e)}")
        return None


def show_notifications(notifications: List[Dict[str, Any]]) -> None:
    for notification in notifications:
        text = notification["title"]
        if notification.get("description"):
            text += f" {notification['description']}"
        icon = "⚠️" if notification.get("variant") == "destructive" else "✅"
        st.toast(text, icon=icon)


def update_field(path: str, value: Any) -> Optional[Dict[str, Any]]:
    return api_request("PATCH", "/api/v1/portfolio/fields", json={"path": path, "value": value})


def ai_helper(key: str, label: str, content: str, path: str) -> None:
    """Rewrite a section with AI and store the result."""
    with st.expander(f"✨ AI helper: {label}"):
        instructions = st.text_area(
            "Your instructions",
            placeholder=f'e.g., "Make this {label.lower()} more concise and highlight leadership skills."',
            key=f"ai-instructions-{key}",
        )
        if st.button("Rewrite", key=f"ai-rewrite-{key}"):
            if not instructions.strip():
                st.info("Please provide instructions for the AI to refine the content.")
                return
            with st.spinner(f"AI is thinking... Rewriting your {label.lower()}."):
                result = api_request(
                    "POST",
                    "/api/v1/content/rewrite",
                    json={"sectionContent": content, "instructions": instructions},
                )
            if result and update_field(path, result["rewrittenContent"]):
                st.toast(f"{label} Rewritten!", icon="✅")
                st.rerun()


def upload_page() -> None:
    st.header("Upload Your CV")
    st.markdown("Provide your CV and profession to get started. We'll parse it and recommend a portfolio theme.")

    with st.form("cv_upload_form"):
        cv_file = st.file_uploader("CV Document", type=ACCEPTED_EXTENSIONS, help="PDF, DOC, DOCX or TXT, max 5MB")
        profession = st.text_input("Your Profession", placeholder="e.g., Software Engineer, Graphic Designer")
        submitted = st.form_submit_button("Parse CV & Get Recommendation", type="primary", use_container_width=True)

    if not submitted:
        return
    if cv_file is None:
        st.error("⚠️ CV file is required.")
        return
    if len(profession.strip()) < 3:
        st.error("⚠️ Profession is required (min 3 characters).")
        return

    with st.spinner("⏳ Processing CV... Please wait while we analyze your CV."):
        result = api_request(
            "POST",
            "/api/v1/cv/upload",
            files={"file": (cv_file.name, cv_file.getvalue(), cv_file.type or "application/octet-stream")},
            data={"profession": profession},
        )
    if result:
        show_notifications(result.get("notifications", []))
        theme = result["theme"]
        st.success(f"Recommended theme: **{theme['themeName']}**")
        if theme.get("reason"):
            st.caption(theme["reason"])


def portfolio_page(portfolio: Dict[str, Any]) -> None:
    cv = portfolio.get("cvRecord")
    if not cv:
        st.info("No portfolio yet. Upload your CV first.")
        return

    info = cv["personalInformation"]
    st.header(info["name"])
    st.subheader(info.get("customProfession") or portfolio["profession"])
    edit_mode = portfolio.get("editMode", False)

    col_edit, col_discard = st.columns(2)
    if col_edit.button("Done editing" if edit_mode else "Edit portfolio"):
        api_request("POST", "/api/v1/portfolio/edit-mode")
        st.rerun()
    if col_discard.button("Discard portfolio", type="secondary"):
        api_request("DELETE", "/api/v1/portfolio")
        st.rerun()

    st.markdown("### About")
    if edit_mode:
        summary = st.text_area("Summary", value=cv.get("summary") or "", key="edit-summary")
        if st.button("Save summary"):
            update_field("summary", summary)
            st.rerun()
        custom_profession = st.text_input("Custom profession", value=info.get("customProfession") or "")
        if st.button("Save profession"):
            update_field("personalInformation.customProfession", custom_profession or None)
            st.rerun()
        ai_helper("summary", "Summary", cv.get("summary") or "", "summary")
    else:
        st.write(cv.get("summary") or "")

    st.markdown("### Experience")
    for index, job in enumerate(cv["experience"]):
        st.markdown(f"**{job['title']}**, {job['company']} · {job['dates']}")
        st.write(job["description"])
        if edit_mode:
            ai_helper(f"experience-{index}", f"Job Description for {job['title']}", job["description"],
                      f"experience.{index}.description")

    st.markdown("### Projects")
    for index, project in enumerate(cv["projects"]):
        st.markdown(f"**{project['name']}**")
        if project.get("image"):
            st.image(project["image"])
        st.write(project["description"])
        if edit_mode:
            prompt = st.text_input("Image prompt", value=project.get("imagePrompt") or "", key=f"prompt-{index}")
            if st.button("Generate image", key=f"image-{index}"):
                with st.spinner("Generating image..."):
                    result = api_request("POST", "/api/v1/images/generate", json={"prompt": prompt})
                if result and result.get("imageDataUri"):
                    update_field(f"projects.{index}.image", result["imageDataUri"])
                    update_field(f"projects.{index}.imagePrompt", prompt)
                    st.rerun()
                elif result:
                    st.error(result.get("error") or "Image generation failed.")
            ai_helper(f"project-{index}", f"Project {project['name']}", project["description"],
                      f"projects.{index}.description")

    st.markdown("### Education")
    for entry in cv["education"]:
        st.markdown(f"**{entry['degree']}**, {entry['institution']} · {entry['dates']}")

    st.markdown("### Skills")
    st.write(", ".join(cv["skills"]))


def theme_page(portfolio: Dict[str, Any]) -> None:
    st.header("Themes")
    theme = portfolio.get("theme")
    if theme:
        st.markdown(f"Active theme: **{theme['themeName']}**")

    named = api_request("GET", "/api/v1/themes/available")
    if named:
        choice = st.selectbox("Named themes", named["themes"])
        if st.button("Use named theme"):
            api_request("PUT", "/api/v1/portfolio/theme", json={"themeName": choice})
            st.rerun()

    st.divider()
    st.subheader("Generate a custom theme")
    with st.form("theme_form"):
        vibe = st.selectbox("Vibe", VIBES)
        color_preference = st.selectbox("Color preference", COLOR_PREFERENCES)
        mode = st.radio("Mode", ["light", "dark", "system"], horizontal=True)
        inspiration = st.text_input("Industry/style inspiration (optional)")
        submitted = st.form_submit_button("Generate themes", type="primary")

    if submitted:
        with st.spinner("Generating themes..."):
            result = api_request(
                "POST",
                "/api/v1/themes/generate",
                json={
                    "vibe": vibe,
                    "colorPreference": color_preference,
                    "mode": mode,
                    "industryInspiration": inspiration or None,
                    "currentProfession": portfolio.get("profession"),
                },
            )
        if result:
            st.session_state["generated_themes"] = result["themes"]

    for index, option in enumerate(st.session_state.get("generated_themes", [])):
        st.markdown(f"**{option['themeName']}**: {option['description']}")
        swatches = "".join(
            f'<span style="display:inline-block;width:24px;height:24px;background:hsl({value});border:1px solid #ccc"></span>'
            for value in option["themeVariables"].values()
        )
        st.markdown(swatches, unsafe_allow_html=True)
        if st.button("Apply", key=f"apply-theme-{index}"):
            api_request("PUT", "/api/v1/portfolio/theme", json=option)
            st.rerun()


def preview_page() -> None:
    st.header("Portfolio preview")
    try:
        with httpx.Client(base_url=API_BASE_URL, timeout=10.0) as client:
            response = client.get("/api/v1/portfolio/site")
    except httpx.HTTPError as e:
        st.error(f"Error communicating with the API: {str(e)}")
        return
    if response.status_code == 404:
        st.info("No portfolio yet. Upload your CV first.")
        return
    components.html(response.text, height=900, scrolling=True)


def main():
    """Main Streamlit app."""
    with st.sidebar:
        st.header("🎨 CV Portfolio Builder")
        page = st.radio("Page", ["Upload", "Portfolio", "Themes", "Preview"])
        st.divider()
        st.header("🔍 Server status")
        try:
            with httpx.Client(timeout=2.0) as client:
                response = client.get(f"{API_BASE_URL}/health")
                if response.status_code == 200:
                    st.success("✅ API is running")
                else:
                    st.warning(f"⚠️  API responded with status: {response.status_code}")
        except httpx.ConnectError:
            st.error("❌ API is not running")
            st.code("uvicorn portfolio_app.main:app --reload", language="bash")

    if page == "Upload":
        upload_page()
        return
    if page == "Preview":
        preview_page()
        return

    portfolio = api_request("GET", "/api/v1/portfolio")
    if portfolio is None:
        return
    if page == "Portfolio":
        portfolio_page(portfolio)
    else:
        theme_page(portfolio)


if __name__ == "__main__":
    main()
