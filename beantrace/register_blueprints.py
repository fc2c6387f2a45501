"""
Centralized Blueprint Registration
All blueprints MUST be registered inside register_all_blueprints(app)
"""


def register_all_blueprints(app):

    # Root
    from beantrace.routes.root.root_routes import root_bp
    from beantrace.routes.root.dashboard_routes import dashboard_bp
    app.register_blueprint(root_bp)
    app.register_blueprint(dashboard_bp)

    # Auth
    from beantrace.routes.auth.auth_routes import auth_bp
    app.register_blueprint(auth_bp)

    # Farmer modules
    from beantrace.routes.farmer.farm_routes import farmer_bp
    from beantrace.routes.farmer.data_hub_routes import data_hub_bp
    from beantrace.routes.farmer.gap_routes import gap_bp
    app.register_blueprint(farmer_bp)
    app.register_blueprint(data_hub_bp)
    app.register_blueprint(gap_bp)

    # Processor
    from beantrace.routes.processor.workbench_routes import processor_bp
    app.register_blueprint(processor_bp)

    # Cupping
    from beantrace.routes.cupping.cupping_routes import cupping_bp, scoring_bp
    from beantrace.routes.cupping.competition_routes import competition_bp
    app.register_blueprint(cupping_bp)
    app.register_blueprint(scoring_bp)
    app.register_blueprint(competition_bp)

    # Roaster
    from beantrace.routes.roaster.roaster_routes import roaster_bp
    app.register_blueprint(roaster_bp)

    # Insights
    from beantrace.routes.insights.insights_routes import insights_bp
    app.register_blueprint(insights_bp)

    # Traceability
    from beantrace.routes.traceability.trace_routes import traceability_bp
    app.register_blueprint(traceability_bp)

    # Admin
    from beantrace.routes.admin.admin_routes import admin_bp
    app.register_blueprint(admin_bp)

    app.logger.info("All blueprints registered")
